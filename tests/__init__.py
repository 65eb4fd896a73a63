"""
Test Suite for the Learning & Predictive Insight Engine

This package contains tests for the insight_engine components:
- test_learning_engine.py - Trend, mining, insights, accuracy, engine facade
- test_learning_store.py - Snapshot loading, model store, Markdown report
- test_learning_router.py - HTTP routes
"""
