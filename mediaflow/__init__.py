"""mediaflow - single-step workflow operations for media packages.

The runtime subpackage holds the "execute once" operation: run one external
program against a work item, inspect the produced track if there is one, and
attach the result back to the work item.
"""

__version__ = "0.3.0"
