#!/usr/bin/env python

from glob import iglob
import os

from setuptools import setup, find_packages

pkg_root = os.path.dirname(__file__)

entry_points = dict(console_scripts=['harvestd = irq_metrics.harvestd:main'])
entry_points.update(
	('irq_metrics.{}'.format(ep_type), list(
		'{0} = irq_metrics.{1}.{0}'\
			.format(os.path.basename(fn)[:-3], ep_type)
		for fn in iglob(os.path.join(
			pkg_root, 'irq_metrics', ep_type, '[!_]*.py' )) ))
	for ep_type in ['collectors', 'processors', 'sinks', 'loops'] )

# Error-handling here is to allow package to be built w/o README included
try: readme = open(os.path.join(pkg_root, 'README.txt')).read()
except IOError: readme = ''

setup(

	name = 'graphite-irq-metrics',
	version = '16.10.0',
	license = 'WTFPL',
	keywords = 'graphite interrupts irq softirq metrics proc',

	description = 'Standalone Graphite collector for per-irq'
		' and per-cpu interrupt counters from /proc/interrupts and /proc/softirqs',
	long_description = readme,

	classifiers = [
		'Development Status :: 4 - Beta',
		'Environment :: No Input/Output (Daemon)',
		'Intended Audience :: Developers',
		'Intended Audience :: System Administrators',
		'License :: OSI Approved',
		'Operating System :: POSIX :: Linux',
		'Programming Language :: Python',
		'Programming Language :: Python :: 3',
		'Programming Language :: Python :: 3 :: Only',
		'Topic :: System :: Monitoring',
		'Topic :: System :: Operating System Kernels :: Linux' ],

	python_requires = '>=3.10',
	install_requires = ['PyYAML'],
	extras_require = {'test': ['pytest']},

	packages = find_packages(exclude=['tests']),
	package_data = {'irq_metrics': ['harvestd.yaml']},

	entry_points = entry_points )
