# -*- coding: utf-8 -*-

import copy

import yaml

import logging
log = logging.getLogger(__name__)


def merge_conf(base, update):
	'''Returns deep copy of "base" dict with values from "update" merged in,
		nested dicts are merged recursively, anything else gets replaced.'''
	result = copy.deepcopy(base)
	for k, v in (update or dict()).items():
		if isinstance(v, dict) and isinstance(result.get(k), dict):
			v = merge_conf(result[k], v)
		else: v = copy.deepcopy(v)
		result[k] = v
	return result


def load_conf(*paths):
	'Loads and merges YAML files in order, later ones overriding values in the former.'
	conf = dict()
	for path in paths:
		with open(path) as src: data = yaml.safe_load(src)
		if data is None: continue
		if not isinstance(data, dict):
			raise ValueError('Top-level configuration must be a mapping: {!r}'.format(path))
		log.debug('Merging configuration file: {}'.format(path))
		conf = merge_conf(conf, data)
	return conf
