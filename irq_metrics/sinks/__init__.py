# -*- coding: utf-8 -*-

import itertools as it, operator as op, functools as ft

import logging
log = logging.getLogger(__name__)


class Sink(object):

	'''Destination for processed (metric_name, value, timestamp) tuples.
		Carbon plaintext protocol lines, as built by format_lines(),
			are the common wire/log representation for all sinks here.'''

	def __init__(self, conf):
		self.conf = conf

	@staticmethod
	def format_lines(tuples):
		return list(it.starmap('{} {} {}\n'.format, tuples))

	def dispatch(self, *tuples):
		raise NotImplementedError( 'Sink.dispatch method should be overidden in sink'
			' subclasses to dispatch (metric_name, value, timestamp) tuples to whatever destination.' )

	def __repr__(self):
		return '<{} sink>'.format(type(self).__name__)
