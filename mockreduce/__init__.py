#!/usr/bin/python
# -*- coding: utf-8 -*-

__version__ = (0, 1, 0)
__author__ = "django-mongodb-mockreduce contributors"
__contact__ = "django-non-relational@googlegroups.com"
__homepage__ = "http://django-nonrel.org/"
__docformat__ = "restructuredtext"
