"""
Exceptions raised by buildinit. Every exception carries an ``error_code`` so the CLI can report it uniformly.
"""
