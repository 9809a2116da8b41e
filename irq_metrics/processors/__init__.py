# -*- coding: utf-8 -*-

import logging
log = logging.getLogger(__name__)


class Processor(object):

	'''Mangles (name, value, timestamp) tuples on their way to sinks.
		process() returns (tuple, sinks), where None instead of tuple
			drops the datapoint and sinks can be narrowed down for it.'''

	def __init__(self, conf):
		self.conf = conf

	def process(self, dp_tuple, sinks):
		raise NotImplementedError( 'Processor.process method should be'
			' overidden in processor subclasses to return (dp_tuple, sinks).' )

	def __repr__(self):
		return '<{} processor>'.format(type(self).__name__)
