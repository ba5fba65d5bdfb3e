"""Bigram, tf-idf and negation-sentiment analysis of profile essays split by smoking status."""

__version__ = "0.1.0"
