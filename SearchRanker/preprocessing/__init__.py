"""
Document model and corpus loading.
Crawled documents arrive already tokenized; no stemming or stop-word removal is applied.
"""
