"""
Models package for the Deadlock Graph Analyzer.
Contains graph nodes, edges and the parsed matrix model.
"""
