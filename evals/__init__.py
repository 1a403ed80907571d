"""
Evaluation suite for the governance core.

Run evals: pytest evals/ -v
"""
