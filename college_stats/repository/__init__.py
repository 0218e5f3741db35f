"""Repository layer: SQL access helpers over the college statistics relations.

Functions take an open sqlite3.Connection and stay thin; services own
connection lifetime and transactions.
"""
