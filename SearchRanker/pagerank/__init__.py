"""
Link-graph authority ranking (PageRank) for a fixed document corpus.
"""
