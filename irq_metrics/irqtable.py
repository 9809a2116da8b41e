# -*- coding: utf-8 -*-

import itertools as it, operator as op, functools as ft
from string import digits
import re

import logging
log = logging.getLogger(__name__)


name_max_len = 50
counter_max = 2**64 - 1


def parse_counter(word, _re_num=re.compile(r'^\s*([-+]?)([0-9]+)')):
	'''Parses unsigned 64-bit base-10 counter in the same permissive way
		as strtoull() does - trailing garbage is ignored, no digits yields 0,
		out-of-range values saturate and negative ones wrap around.'''
	match = _re_num.search(word)
	if not match: return 0
	sign, val = match.group(1), int(match.group(2))
	if val > counter_max: return counter_max
	return (-val & counter_max) if sign == '-' else val


def detect_cpus(header_words):
	return sum(1 for word in header_words if word.startswith('CPU'))


def compose_name(is_numeric_id, description, irq_id, max_len=name_max_len):
	'''Display name for the interrupt row.
		Numeric (hardware) irqs get "<description>_<id>", with id suffix only
			added while description is shorter than max_len-1, anything else
			(or numeric ones without description) is named by its id.
		Result is always truncated to max_len.'''
	if not is_numeric_id or not description: return irq_id[:max_len]
	name = description[:max_len]
	if len(name) < max_len - 1:
		name = '{}_{}'.format(name, irq_id)[:max_len]
	return name


class InterruptRecord(object):

	__slots__ = 'used', 'id', 'name', 'total', 'values'

	def __init__(self, cpus):
		self.used, self.id, self.name, self.total = False, None, None, 0
		self.values = [0] * cpus

	def __repr__(self):
		return '<InterruptRecord {} {!r} ({}): {} {}>'.format(
			'used' if self.used else 'unused', self.id, self.name, self.total, self.values )


class InterruptTable(object):

	'''Reusable per-row InterruptRecord buffer.
		Only grows, records past the current length are stale leftovers
			from earlier (longer) reads and are never exposed by iteration.
		Record shape (cpu count) is fixed by the first ensure_capacity() call.'''

	def __init__(self):
		self.records, self.length, self.cpus = list(), 0, None

	@property
	def capacity(self):
		return len(self.records)

	def ensure_capacity(self, rows, cpus):
		if self.cpus is None: self.cpus = cpus
		elif cpus != self.cpus:
			raise ValueError( 'Interrupt table was shaped for'
				' {} cpus, cannot resize it for {}'.format(self.cpus, cpus) )
		if rows > self.capacity:
			log.debug('Growing interrupt table: {} -> {} rows'.format(self.capacity, rows))
			self.records.extend(InterruptRecord(cpus) for n in range(rows - self.capacity))
		self.length = rows
		return self

	def __len__(self):
		return self.length

	def __getitem__(self, n):
		if not 0 <= n < self.length: raise IndexError(n)
		return self.records[n]

	def __iter__(self):
		return it.islice(self.records, self.length)

	def used(self):
		return filter(op.attrgetter('used'), self)


def parse_table(ff, table, cpus, max_name_len=name_max_len):
	'''Fills InterruptTable from ProcFile contents, row 0 being the header.
		Blank rows and rows without id are marked as unused,
			missing value columns are zero-padded.'''
	lines = ff.lines
	table.ensure_capacity(lines, cpus)
	table[0].used = False

	for l in range(1, lines):
		irr = table[l]
		irr.used, irr.total = False, 0

		words = ff.linewords(l)
		if not words: continue
		irq_id = ff.lineword(l, 0)
		if irq_id.endswith(':'): irq_id = irq_id[:-1]
		if not irq_id: continue
		irr.id = irq_id

		values = irr.values
		for c in range(cpus):
			values[c] = parse_counter(ff.lineword(l, c + 1)) if c + 1 < words else 0
		irr.total = sum(values) & counter_max

		# Assumes exactly one id column before per-cpu ones,
		#  which is not the case for some arch-specific rows
		description = ff.lineword(l, words - 1) if words > cpus + 2 else None
		irr.name = compose_name(irq_id[0] in digits, description, irq_id, max_name_len)
		irr.used = True

	return table
