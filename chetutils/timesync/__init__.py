# Timesync package for chetutils
"""
Network time (SNTP) and the scheduled auto-clicker built on it.
"""
