"""Evaluation of Lispy values: the evaluator and the application engine."""
