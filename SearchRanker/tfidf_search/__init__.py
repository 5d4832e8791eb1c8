"""
TF-IDF relevance module: corpus term statistics and cosine similarity
between query and document vectors.
"""
