# -*- coding: utf-8 -*-

from .interrupts import Interrupts

import logging
log = logging.getLogger(__name__)


class SoftIRQs(Interrupts):

	'Same as interrupts collector, but for /proc/softirqs table.'

	source = '/proc/softirqs'

	system_series = 'system', 'softirqs'
	system_meta = dict( title='System softirqs',
		units='softirqs/s', family='softirqs', priority=950 )
	cpu_series = 'cpu', 'cpu{}_softirqs'
	cpu_meta = dict( title='CPU{} softirqs', units='softirqs/s',
		family='softirqs', context='cpu.softirqs', priority=3000 )


collector = SoftIRQs
