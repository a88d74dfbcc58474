"""Finnhub REST endpoint paths."""

QUOTE_PATH = "/quote"
PROFILE_PATH = "/stock/profile2"
SEARCH_PATH = "/search"
