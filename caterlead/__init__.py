"""Caterlead: venue discovery, streamed search results and lead enrichment."""
