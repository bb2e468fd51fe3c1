"""
Algorithms package for the Deadlock Graph Analyzer.
Contains graph parsing, graph reduction (safety check), cycle search and the detection pipeline.
"""
