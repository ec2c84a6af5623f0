"""
Package marker for source code under `src`.
The content API lives in `src.api`; shared settings and logging live in `src.common`.
"""
