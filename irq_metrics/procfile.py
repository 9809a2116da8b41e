# -*- coding: utf-8 -*-

import itertools as it, operator as op, functools as ft
import re

import logging
log = logging.getLogger(__name__)


class ProcFile(object):

	'''Word-split view of a procfs text file.
		File is kept open and re-read from the start on each readall() call,
		every line is split into words on runs of spaces and tabs.
		Only the data from the last successful readall() is exposed.'''

	separators = ' \t'

	def __init__(self, path, src):
		self.path, self.src = path, src
		self._split = re.compile('[{}]+'.format(re.escape(self.separators))).split
		self._lines = list()

	@classmethod
	def open(cls, path):
		try: src = open(path, 'rb')
		except (IOError, OSError) as err:
			log.debug('Failed to open {!r}: {}'.format(path, err))
			return None
		return cls(path, src)

	def readall(self):
		'Returns self on success, None (and closes the file) if it cannot be read.'
		try:
			self.src.seek(0)
			data = self.src.read()
		except (IOError, OSError, ValueError) as err:
			log.debug('Failed to read {!r}: {}'.format(self.path, err))
			self.close()
			return None
		data = data.decode('utf-8', 'replace').splitlines()
		self._lines = list(list(filter(None, self._split(line))) for line in data)
		return self

	def close(self):
		if self.src is None: return
		try: self.src.close()
		except (IOError, OSError) as err:
			log.debug('Error closing {!r}: {}'.format(self.path, err))
		self.src = None

	@property
	def lines(self):
		return len(self._lines)

	def linewords(self, line):
		try: return len(self._lines[line])
		except IndexError: return 0

	def lineword(self, line, word):
		try: return self._lines[line][word]
		except IndexError: return ''

	def words(self, line):
		return list(map(ft.partial(self.lineword, line), range(self.linewords(line))))

	def __repr__(self):
		return '<ProcFile {!r} ({} lines)>'.format(self.path, self.lines)
