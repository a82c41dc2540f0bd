# src/gauge_exec/cli/__init__.py
