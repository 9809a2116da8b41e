# -*- coding: utf-8 -*-

import itertools as it, operator as op, functools as ft

from . import Loop

import logging
log = logging.getLogger(__name__)


class BasicLoop(Loop):

	'Simple synchronous "while True: fetch && process && send" loop.'

	def poll(self, collectors):
		data = list()
		for name, collector in collectors.items():
			log.debug('Polling data from a collector (name: {}): {}'.format(name, collector))
			try: data.extend(collector.read())
			except Exception as err:
				log.exception( 'Failed to poll collector'
					' (name: {}, obj: {}): {}'.format(name, collector, err) )
		return data

	def process(self, data, processors, sinks, ts_now):
		sink_data = dict() # to batch datapoints on per-sink basis
		log.debug('Processing {} datapoints'.format(len(data)))
		for dp in filter(None, (dp.get(ts=ts_now) for dp in data)):
			proc_sinks = sinks.copy()
			for name, proc in processors.items():
				if dp is None: break
				try: dp, proc_sinks = proc.process(dp, proc_sinks)
				except Exception as err:
					log.exception(( 'Failed to process datapoint (data: {},'
						' processor: {}, obj: {}): {}, discarding' ).format(dp, name, proc, err))
					break
			else:
				if dp is None: continue
				for name in proc_sinks:
					sink_data.setdefault(name, list()).append(dp)
		return sink_data

	def dispatch(self, sink_data, sinks):
		log.debug('Dispatching data to {} sink(s)'.format(len(sink_data)))
		if self.conf.get('debug', dict()).get('dry_run'): return
		for name, tuples in sink_data.items():
			sink = sinks[name]
			log.debug(( 'Sending {} datapoints to sink'
				' (name: {}): {}' ).format(len(tuples), name, sink))
			try: sink.dispatch(*tuples)
			except Exception as err:
				log.exception( 'Failed to dispatch data to sink'
					' (name: {}, obj: {}): {}'.format(name, sink, err) )

	def tick(self, collectors, processors, sinks):
		data = self.poll(collectors)
		ts_now = self.time_func()
		self.dispatch(self.process(data, processors, sinks, ts_now), sinks)
		return ts_now

	def start(self, collectors, processors, sinks):
		ts = self.time_func()
		while True:
			ts_now = self.tick(collectors, processors, sinks)
			while ts < ts_now: ts += self.conf['interval']
			ts_sleep = max(0, ts - self.time_func())
			log.debug('Sleep: {}s'.format(ts_sleep))
			self.sleep_func(ts_sleep)


loop = BasicLoop
