"""
SearchRanker - relevance ranking for a fixed corpus of crawled documents.
Combines link-graph authority (PageRank) and TF-IDF cosine similarity.
"""
