#!/usr/bin/env python
# -*- coding: utf-8 -*-

import itertools as it, operator as op, functools as ft
from collections import OrderedDict
from importlib import metadata
import os, sys, logging, logging.config

from .utils import load_conf, merge_conf


conf_default = '{}.yaml'.format(os.path.splitext(os.path.realpath(__file__))[0])
host_prefix_env = 'IRQ_METRICS_HOST_PREFIX'


def parse_args(argv=None):
	import argparse
	parser = argparse.ArgumentParser(
		description='Collect and dispatch interrupt counters to Graphite.')
	parser.add_argument('-t', '--destination', metavar='host[:port]',
		help='host[:port] (default port: 2003, can be overidden'
			' via config file) of sink destination endpoint (e.g. carbon'
			' linereceiver tcp port, by default).')
	parser.add_argument('-i', '--interval', type=int, metavar='seconds',
		help='Interval between collecting and sending the datapoints.')

	parser.add_argument('-e', '--collector-enable',
		action='append', metavar='collector', default=list(),
		help='Enable only the specified metric collectors,'
				' can be specified multiple times.')
	parser.add_argument('-d', '--collector-disable',
		action='append', metavar='collector', default=list(),
		help='Explicitly disable specified metric collectors,'
			' can be specified multiple times. Overrides --collector-enable.')

	parser.add_argument('-s', '--sink-enable',
		action='append', metavar='sink', default=list(),
		help='Enable only the specified datapoint sinks,'
				' can be specified multiple times.')
	parser.add_argument('-x', '--sink-disable',
		action='append', metavar='sink', default=list(),
		help='Explicitly disable specified datapoint sinks,'
			' can be specified multiple times. Overrides --sink-enable.')

	parser.add_argument('-p', '--processor-enable',
		action='append', metavar='processor', default=list(),
		help='Enable only the specified datapoint processors,'
				' can be specified multiple times.')
	parser.add_argument('-z', '--processor-disable',
		action='append', metavar='processor', default=list(),
		help='Explicitly disable specified datapoint processors,'
			' can be specified multiple times. Overrides --processor-enable.')

	parser.add_argument('-c', '--config',
		action='append', metavar='path', default=list(),
		help='Configuration files to process.'
			' Can be specified more than once.'
			' Values from the latter ones override values in the former.'
			' Available CLI options override the values in any config.')

	parser.add_argument('--host-prefix', metavar='path',
		help='Path prefix for /proc files, e.g. where host /proc is mounted'
			' inside a container. Default is to use {} env var, if set.'.format(host_prefix_env))
	parser.add_argument('-n', '--dry-run',
		action='store_true', help='Do not actually send data.')
	parser.add_argument('--debug',
		action='store_true', help='Verbose operation mode.')
	return parser.parse_args(argv)


def build_conf(optz, environ=os.environ):
	cfg = load_conf(conf_default, *optz.config)

	# Fill "auto-detected" blanks in the configuration, CLI overrides
	sink_base = cfg['sinks']['_default']
	if optz.destination: sink_base['host'] = optz.destination
	host = str(sink_base['host']).rsplit(':', 1)
	sink_base['host'] = (host[0], sink_base['default_port'])\
		if len(host) == 1 else (host[0], int(host[1]))
	if optz.interval: cfg['loop']['interval'] = optz.interval
	if optz.dry_run: cfg['debug']['dry_run'] = optz.dry_run
	host_prefix = optz.host_prefix or environ.get(host_prefix_env)
	if host_prefix: cfg['collectors']['_default']['host_prefix'] = host_prefix

	# Override "enabled" collector/sink parameters, based on CLI
	for ep, enabled, disabled in\
			[ ('collectors', optz.collector_enable, optz.collector_disable),
				('processors', optz.processor_enable, optz.processor_disable),
				('sinks', optz.sink_enable, optz.sink_disable) ]:
		conf = cfg[ep]
		conf_base = conf.pop('_default', None) or dict()
		if 'debug' not in conf_base: conf_base['debug'] = cfg['debug']
		for name, subconf in list(conf.items()):
			subconf = conf[name] = merge_conf(conf_base, subconf)
			if enabled: subconf['enabled'] = name in enabled
			if disabled and name in disabled: subconf['enabled'] = False
		conf['_default'] = conf_base
		conf['_cli'] = enabled, disabled
	return cfg


def load_plugins(ep_type, conf, entry_points=None):
	'''Returns OrderedDict of initialized plugin objects of specified type,
		with names and classes taken from "irq_metrics.<type>s" entry points.'''
	log = logging.getLogger('irq_metrics.harvestd')
	ep_key = '{}s'.format(ep_type)
	if entry_points is None:
		entry_points = metadata.entry_points(group='irq_metrics.{}'.format(ep_key))
	conf_base, (enabled, disabled) = conf['_default'], conf['_cli']

	objects = OrderedDict()
	for ep in entry_points:
		if ep.name[0] == '_':
			log.debug( 'Skipping {} entry point,'
				' prefixed by underscore: {}'.format(ep_type, ep.name) )
			continue
		subconf = conf.get(ep.name)
		if subconf is None:
			subconf = merge_conf(conf_base, dict())
			if enabled: subconf['enabled'] = ep.name in enabled
			if disabled and ep.name in disabled: subconf['enabled'] = False
		if not subconf.get('enabled', True): continue
		log.debug('Loading {}: {}'.format(ep_type, ep.name))
		try: obj = getattr(ep.load(), ep_type)(subconf)
		except Exception as err:
			log.exception('Failed to load/init {} ({}): {}'.format(ep_type, ep.name, err))
			continue
		objects[ep.name] = obj
	log.debug('{}: {}'.format(ep_key.title(), objects))
	return objects


def configure_logging(conf, level=None):
	conf = dict(conf)
	tracebacks = conf.pop('tracebacks', True)
	logging.config.dictConfig(conf)
	if level is not None: logging.getLogger().setLevel(level)
	if not tracebacks:
		class NoTBLogger(logging.Logger):
			def exception(self, *argz, **kwz):
				kwz.pop('exc_info', None)
				self.error(*argz, **kwz)
		logging.setLoggerClass(NoTBLogger)


def main(argv=None):
	optz = parse_args(argv)
	cfg = build_conf(optz)

	configure_logging(cfg['logging'], logging.DEBUG if optz.debug else None)
	log = logging.getLogger('irq_metrics.harvestd')

	# Init global cfg for collectors' usage
	from . import collectors
	collectors.cfg = cfg

	plugins = dict()
	for ep_type in 'collector', 'processor', 'sink':
		objects = plugins[ep_type] = load_plugins(ep_type, cfg['{}s'.format(ep_type)])
		if ep_type != 'processor' and not objects:
			log.critical('No {}s were properly enabled/loaded, bailing out'.format(ep_type))
			return 1

	loop = dict( (ep.name, ep) for ep in
		metadata.entry_points(group='irq_metrics.loops') )
	conf = dict(cfg['loop'])
	if 'debug' not in conf: conf['debug'] = cfg['debug']
	loop = loop[cfg['loop']['name']].load().loop(conf)

	collectors, processors, sinks = op.itemgetter('collector', 'processor', 'sink')(plugins)
	log.debug(
		'Starting main loop: {} ({} collectors, {} processors, {} sinks)'\
		.format(loop, len(collectors), len(processors), len(sinks)) )
	try: loop.start(collectors, processors, sinks)
	except KeyboardInterrupt: pass
	return 0

if __name__ == '__main__': sys.exit(main())
