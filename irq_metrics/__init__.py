# -*- coding: utf-8 -*-

__version__ = '16.10.0'
