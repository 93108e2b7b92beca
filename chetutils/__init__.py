# chetutils
# Null-safe value helpers, Chinese-locale formatting and small automations

"""
Helpers for everyday values (numbers, dates, strings, streams, tables,
enums and collections) that return a default instead of raising, plus a
network-time auto-clicker, an Edge collections exporter and a
time-proximity record grouper.
"""

__version__ = "0.1.0"
