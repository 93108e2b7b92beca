# CLI package for chetutils
"""
Command line front end for the formatting helpers and the demo programs.

Commands:
    chetutils upper       Chinese upper-case currency amount
    chetutils ntp         Query network time
    chetutils autoclick   Click at a network-time target
"""
