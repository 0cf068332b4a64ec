"""Personal finance management core: categories, transactions, savings goals and reports."""

__version__ = "1.0.0"
