# -*- coding: utf-8 -*-

import itertools as it, operator as op, functools as ft
from time import sleep
import socket

from . import Sink

import logging
log = logging.getLogger(__name__)


class CarbonSocket(Sink):

	'''Simple blocking non-buffering sender
		to graphite carbon tcp linereceiver interface.'''

	sock = None

	def __init__(self, conf):
		super(CarbonSocket, self).__init__(conf)
		if not self.conf.get('debug', dict()).get('dry_run'): self.connect()

	def connect(self, send=None):
		host, port = self.conf['host']
		reconnects = self.conf.get('max_reconnects')
		while True:
			try:
				addrinfo = list(reversed(socket.getaddrinfo(
					host, port, socket.AF_UNSPEC, socket.SOCK_STREAM )))
				assert addrinfo, addrinfo
				while addrinfo:
					# Try connecting to all of the returned addresses
					af, socktype, proto, canonname, sa = addrinfo.pop()
					try:
						self.sock = socket.socket(af, socktype, proto)
						self.sock.connect(sa)
					except OSError:
						self.close()
						if not addrinfo: raise
					else: break
				log.debug('Connected to Carbon at {}:{}'.format(*sa[:2]))
				if send: self.sock.sendall(send)

			except OSError as err:
				if reconnects is not None:
					reconnects -= 1
					if reconnects <= 0: raise
				if isinstance(err, socket.gaierror):
					log.info('Failed to resolve host ({!r}): {}'.format(host, err))
				else: log.info('Failed to connect to {}:{}: {}'.format(host, port, err))
				if self.conf.get('reconnect_delay'):
					sleep(max(0, self.conf['reconnect_delay']))

			else: break

	def close(self):
		if self.sock is None: return
		try: self.sock.close()
		except OSError: pass
		self.sock = None

	def reconnect(self, send=None):
		self.close()
		self.connect(send=send)

	@classmethod
	def pack(cls, tuples):
		return ''.join(cls.format_lines(tuples)).encode('utf-8')

	def dispatch(self, *tuples):
		packet = self.pack(tuples)
		try: self.sock.sendall(packet)
		except (OSError, AttributeError) as err:
			log.error('Failed to send data to Carbon server: {}'.format(err))
			self.reconnect(send=packet)


sink = CarbonSocket
