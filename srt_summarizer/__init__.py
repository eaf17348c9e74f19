"""Bullet-point summaries of subtitle and text files via map-reduce prompting."""
