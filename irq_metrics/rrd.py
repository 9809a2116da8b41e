# -*- coding: utf-8 -*-

import itertools as it, operator as op, functools as ft
from collections import OrderedDict
from time import time

import logging
log = logging.getLogger(__name__)


class Dimension(object):

	__slots__ = ( 'id', 'name', 'multiplier', 'divisor',
		'algorithm', 'value', 'updated', 'last_value', 'last_ts' )

	algorithms = 'incremental', 'absolute'

	def __init__(self, dim_id, name=None, multiplier=1, divisor=1, algorithm='incremental'):
		if algorithm not in self.algorithms:
			raise ValueError('Unknown dimension algorithm: {!r}'.format(algorithm))
		self.id, self.name = dim_id, name or dim_id
		self.multiplier, self.divisor, self.algorithm = multiplier, divisor, algorithm
		self.value, self.updated = None, False
		self.last_value = self.last_ts = None

	def __repr__(self):
		return '<Dimension {!r} ({}): {}>'.format(self.id, self.name, self.last_value)


class Series(object):

	'''Named set of dimensions, updated in cycles.
		Values set during a cycle only become visible as committed values
			(last_value/last_ts of each dimension) on commit.'''

	def __init__( self, category, key, title=None, units=None,
			family=None, context=None, priority=1000, update_every=1, chart_type='line' ):
		self.category, self.key = category, key
		self.id = '{}.{}'.format(category, key)
		self.title, self.units = title or self.id, units
		self.family, self.context = family or key, context or self.id
		self.priority, self.update_every, self.chart_type = priority, update_every, chart_type
		self.dimensions = OrderedDict()
		self.cycles, self.dt, self.last_ts = 0, None, None

	def __contains__(self, dim_id):
		return dim_id in self.dimensions

	def __getitem__(self, dim_id):
		return self.dimensions[dim_id]

	def __repr__(self):
		return '<Series {} [{}] ({} dimensions, {} cycles)>'.format(
			self.id, self.chart_type, len(self.dimensions), self.cycles )


class SeriesStore(object):

	'In-memory registry of Series, collecting committed values until drained.'

	def __init__(self, time_func=time):
		self.time_func = time_func
		self.series = OrderedDict()
		self._committed = OrderedDict()

	def find_series(self, category, key):
		return self.series.get((category, key))

	def create_series(self, category, key, **meta):
		if (category, key) in self.series:
			raise KeyError('Series already exists: {}.{}'.format(category, key))
		series = self.series[category, key] = Series(category, key, **meta)
		log.debug('Created series: {}'.format(series))
		return series

	def find_or_create_series(self, category, key, **meta):
		'Returns (series, created) tuple, meta is only used for newly-created series.'
		series = self.find_series(category, key)
		if series is not None: return series, False
		return self.create_series(category, key, **meta), True

	def advance_cycle(self, series, dt=None):
		series.dt = dt
		for dim in series.dimensions.values(): dim.updated = False

	def add_counter_dimension(self, series, dim_id, name=None, multiplier=1, divisor=1):
		if dim_id in series:
			log.debug('Dimension {!r} already exists in {}'.format(dim_id, series.id))
			return series[dim_id]
		dim = series.dimensions[dim_id] = Dimension(
			dim_id, name, multiplier, divisor, algorithm='incremental' )
		return dim

	def set_dimension_value(self, series, dim_id, value):
		dim = series[dim_id] # KeyError for unknown ones
		dim.value, dim.updated = value, True
		return dim

	def commit_cycle(self, series, ts=None):
		'Commits values set in this cycle, each replacing any undrained older one.'
		if ts is None: ts = self.time_func()
		for dim in series.dimensions.values():
			if not dim.updated: continue
			dim.last_value, dim.last_ts, dim.updated = dim.value, ts, False
			self._committed[series.id, dim.id] = series, dim, dim.value, ts
		series.cycles += 1
		series.last_ts = ts

	def drain(self):
		'''Yields (series, dimension, value, ts) tuples committed since the last drain.
			Only the latest committed value of each dimension is kept.'''
		committed, self._committed = self._committed, OrderedDict()
		return iter(committed.values())
