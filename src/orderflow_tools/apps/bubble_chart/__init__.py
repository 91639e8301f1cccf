"""Bubble chart pipeline for recorded trade feeds.

Normalize last-traded-price records for one instrument into ticks, bucket
them into OHLC bars with a buy/sell and big-player volume split, and flag
exact-timestamp trade clusters whose combined and peak sizes cross
configured thresholds.
"""
