# -*- coding: utf-8 -*-

from . import Sink

import logging
log = logging.getLogger(__name__)


class Dumper(Sink):

	'''Logs datapoints as carbon lines, exactly as carbon_socket would send them.
		Useful with --dry-run to check metric names and rates.'''

	def __init__(self, *argz, **kwz):
		super(Dumper, self).__init__(*argz, **kwz)
		self.level = logging.getLevelName(str(self.conf.get('level') or 'INFO').upper())
		if not isinstance(self.level, int):
			raise ValueError('Unknown log level for dump sink: {!r}'.format(self.conf['level']))

	def dispatch(self, *tuples):
		lines = self.format_lines(tuples)
		log.log(self.level, '--- dump of {} datapoints'.format(len(lines)))
		for line in lines: log.log(self.level, line.rstrip('\n'))
		log.log(self.level, '--- dump end')


sink = Dumper
