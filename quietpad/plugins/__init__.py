"""Plugins that come with Quietpad.

Each module in this package is a plugin, see :mod:`quietpad.pluginloader`.
Modules whose name starts with an underscore are not plugins.
"""
