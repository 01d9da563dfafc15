"""Zodiac affinity engine.

Sub-modules:
- scorer        – element-based pairwise scoring
- matrix        – symmetric 78-entry sign-pair lookup table
- resolver      – member ↔ member affinity
- team_affinity – team aggregation and organization-wide best pairs
- conflicts     – low-affinity pair alerts
- optimizer     – greedy team construction
- team_report   – strengths / weaknesses / recommendations
- heatmap       – member × member score grid
"""
