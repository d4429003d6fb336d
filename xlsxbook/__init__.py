"""Styles, colours, workbook structure and zip containers for Office Open XML spreadsheets."""

__version__ = "0.1.0"