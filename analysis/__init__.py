"""
Analysis package for the Deadlock Graph Analyzer.
Contains the report model, report builder and highlighting helper.
"""
