"""
deepdive.reporting: presentation and export of analysed batches.

Nothing here scores or ranks; it only renders what the signal engine produced.

Modules:
  formatters - ASCII terminal formatters for Typer CLI commands.
  export     - JSON envelope and flat CSV writers.
"""
