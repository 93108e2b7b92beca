# Automation package for chetutils
"""
Browser automation scripts. Needs the `automation` extra.
"""
