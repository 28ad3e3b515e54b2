"""Outbound adapters: content store, web fetcher, rate limiter, seed loader."""
