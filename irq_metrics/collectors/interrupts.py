# -*- coding: utf-8 -*-

import itertools as it, operator as op, functools as ft
from time import time
import enum, re

from . import Collector, Datapoint
from ..irqtable import InterruptTable, detect_cpus, parse_table, name_max_len
from ..procfile import ProcFile
from ..rrd import SeriesStore

import logging
log = logging.getLogger(__name__)


class CollectStatus(enum.Enum):
	success = 'success'
	retry = 'retry'
	fatal = 'fatal'


class InterruptsError(Exception): pass

class TransientIOError(InterruptsError):
	'Source file cannot be opened or read right now.'

class FormatError(InterruptsError):
	'Source file contents are not an interrupt table.'


class Interrupts(Collector):

	'''Per-irq and per-cpu counters from /proc/interrupts.
		Publishes stacked "system.interrupts" series with per-irq totals and,
			if "per_core" option is enabled, "cpu.cpuN_interrupts" for each cpu.'''

	source = '/proc/interrupts'

	system_series = 'system', 'interrupts'
	system_meta = dict( title='System interrupts',
		units='interrupts/s', family='interrupts', priority=1000 )
	cpu_series = 'cpu', 'cpu{}_interrupts'
	cpu_meta = dict( title='CPU{} Interrupts', units='interrupts/s',
		family='interrupts', context='cpu.interrupts', priority=1100 )

	dp_types = dict(incremental='counter', absolute='gauge')

	def __init__(self, conf, store=None, time_func=time):
		super(Interrupts, self).__init__(conf)
		self.store = store if store is not None else SeriesStore(time_func=time_func)
		self.time_func = time_func

		# Detected once
		self.per_core = bool(self.conf.get('per_core', True))
		self.use_names = bool(self.conf.get('use_names', False))
		self.path = self.conf.get('filename')\
			or '{}{}'.format((self.conf.get('host_prefix') or '').rstrip('/'), self.source)
		try:
			from . import cfg
			self.update_every = cfg['loop']['interval']
		except (KeyError, TypeError):
			self.update_every = self.conf.get('interval', 60)
		self.cpus = None

		# Refreshed every tick
		self.table = InterruptTable()
		self.ff, self._io_failed, self._ts_last = None, False, None

	def __repr__(self):
		return '<{} {!r} (cpus: {})>'.format(type(self).__name__, self.path, self.cpus)


	def _read(self):
		if self.ff is None:
			self.ff = ProcFile.open(self.path)
			if self.ff is None:
				raise TransientIOError('Cannot open {}'.format(self.path))
		ff = self.ff.readall()
		if ff is None:
			self.ff = None # reopened on next tick
			raise TransientIOError('Cannot read {}'.format(self.path))
		self._io_failed = False
		return ff

	def _detect_cpus(self, ff):
		if not self.cpus:
			cpus = detect_cpus(ff.words(0))
			if not cpus:
				raise FormatError( 'Cannot find the number'
					' of CPUs in {} header: {!r}'.format(self.path, ff.words(0)) )
			log.debug('Detected {} cpus in {}'.format(cpus, self.path))
			self.cpus = cpus
		return self.cpus

	def emit_series(self, category, key, value_func, meta, update_every, dt, ts):
		store = self.store
		series, created = store.find_or_create_series(
			category, key, update_every=update_every, chart_type='stacked', **meta )
		if not created: store.advance_cycle(series, dt)
		for irr in self.table.used():
			if irr.id not in series:
				store.add_counter_dimension(series, irr.id, irr.name)
			store.set_dimension_value(series, irr.id, value_func(irr))
		store.commit_cycle(series, ts)
		return series

	def collect(self, update_every, dt):
		'''Runs single collection tick, returning CollectStatus.
			Failures leave detected cpu count and table buffer intact.'''
		try:
			ff = self._read()
			if not ff.lines:
				raise FormatError('Cannot read {}, zero lines reported'.format(self.path))
			cpus = self._detect_cpus(ff)
		except TransientIOError as err:
			if not self._io_failed:
				log.warning('{}, will retry on next poll'.format(err))
				self._io_failed = True
			return CollectStatus.retry
		except FormatError as err:
			log.error(err)
			return CollectStatus.retry

		parse_table(ff, self.table, cpus, name_max_len)
		ts = self.time_func()

		self.emit_series( *self.system_series,
			value_func=op.attrgetter('total'), meta=self.system_meta,
			update_every=update_every, dt=dt, ts=ts )

		if self.per_core:
			category, key = self.cpu_series
			for c in range(cpus):
				meta = dict(self.cpu_meta)
				meta.update(title=meta['title'].format(c), priority=meta['priority'] + c)
				self.emit_series( category, key.format(c),
					value_func=lambda irr, c=c: irr.values[c], meta=meta,
					update_every=update_every, dt=dt, ts=ts )

		return CollectStatus.success


	def metric_name(self, series, dim, _re_bad=re.compile(r'[^\w-]', re.ASCII)):
		label = dim.name if self.use_names else dim.id
		return '{}.{}.{}'.format(series.category, series.key, _re_bad.sub('_', label))

	def read(self):
		ts_now = self.time_func()
		dt = (ts_now - self._ts_last) if self._ts_last is not None else None
		status = self.collect(self.update_every, dt)
		self._ts_last = ts_now
		if status is not CollectStatus.success:
			log.debug('Collection from {} failed: {}'.format(self.path, status.value))
			return
		for series, dim, value, ts in self.store.drain():
			value = value * dim.multiplier // dim.divisor
			yield Datapoint(self.metric_name(series, dim), self.dp_types[dim.algorithm], value, ts)


collector = Interrupts
