"""
widgetscope - effective contract reconstruction for compiled widget libraries.

Given a widget's compiled ``.props.js`` file, rebuilds every property it
accepts (own and inherited), which of them are event callbacks, the style
parts and classes it exposes, and the ancestor chain they came from.
"""

__version__ = "0.3.0"
