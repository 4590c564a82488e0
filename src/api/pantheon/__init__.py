"""Pantheon bounded context.

Gods, their family relations (parents, children, siblings), and their
associations to abodes and emblems.
"""
