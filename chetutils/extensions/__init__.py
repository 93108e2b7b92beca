# Extensions package for chetutils
"""
Null-safe helpers, one module per receiver type.

Each function takes the value it operates on as its first argument, so
`integers.to_chinese_upper(100)` reads like a method call on 100.
"""
