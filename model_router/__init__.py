"""
Model Router API Backend

This package provides a FastAPI backend that analyzes free-text prompts, scores
every catalog model against the inferred requirements and routes the prompt to
the best match, estimating the cost of the exchange.
"""

__version__ = "0.3.0"
