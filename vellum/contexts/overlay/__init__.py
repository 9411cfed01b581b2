"""
Overlay Context

Responsibilities:
- Builds the flat catalog of editable field zones from a computed layout
- Scales zones to the overlay zoom and resolves clicks to zones

Owns: Field zones, hit-testing
Never: Computes frames, edits content (edits go through the content store)
"""
