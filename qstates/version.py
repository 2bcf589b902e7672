# This file is automatically generated by qstates' setup.py.
short_version = '0.1.0.dev0'
version = '0.1.0.dev0+nogit'
release = False
