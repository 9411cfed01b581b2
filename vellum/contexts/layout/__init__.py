"""
Layout Context

Responsibilities:
- Converts between millimeters, points and device units
- Estimates section heights and packs sections into fixed-height pages
- Computes the absolute frame of every field from the resolved theme
- Diagnoses overflow in computed layouts

Owns: Page plans, frames, height estimation
Never: Mutates content, measures rendered output
"""
