"""
Keyword Scout

Seed-keyword expansion and mock SEO metrics service.

Usage:
    from keyword_scout.seo.factory import build_orchestrator

    orchestrator = build_orchestrator()
    result = asyncio.run(orchestrator.run("generate qr code"))
"""

__version__ = "1.0.0"
