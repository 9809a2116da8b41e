# -*- coding: utf-8 -*-

import itertools as it, operator as op, functools as ft
from time import time, sleep

import logging
log = logging.getLogger(__name__)


class Loop(object):

	def __init__(self, conf, time_func=time, sleep_func=sleep):
		self.conf, self.time_func, self.sleep_func = conf, time_func, sleep_func

	def start(self, collectors, processors, sinks):
		raise NotImplementedError( 'Loop.start method should be'
			' overidden in loop subclasses to start poll/process/send loop'
			' using passed Collector, Processor and Sink objects.' )
