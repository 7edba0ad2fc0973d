"""
Package marker for source code under `src.policy_cost`.
It groups related modules under a stable import path and keeps package boundaries explicit.
Most functionality lives in the sibling modules; this file intentionally stays lightweight.
"""
