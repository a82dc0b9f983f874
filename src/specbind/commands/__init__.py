"""Built-in CLI sub-commands for specbind.

* :mod:`~specbind.commands.generate` -- render a bindings module.
* :mod:`~specbind.commands.inspect` -- preview commands, options and the
  identifiers generation would use.

Each module exports a plain callback function registered directly on the
root app.
"""
