"""A client library for the Reddit API: accounts, comments, collections, flair, gold, listings, live threads and emoji."""

__version__ = "0.1.0"