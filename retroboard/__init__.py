"""
Retrospective board exporter.

Renders a retrospective board in a headless browser, reads its columns,
messages and vote counts, and exports them as CSV or plaintext.
"""
