"""
Utilities package for the Deadlock Graph Analyzer.
Contains the graph loader, sample graphs and console logger.
"""
