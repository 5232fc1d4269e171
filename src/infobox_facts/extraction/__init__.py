# ABOUTME: Fact extraction from wiki markup streams
# ABOUTME: Pipeline Stage 1: characters -> environments -> attribute maps -> typed facts

"""
Extraction Layer: Turn a wiki dump into facts

This layer handles:
- Character streams and bracket-environment scanning
- Infobox attribute maps and combination rules
- Term extraction strategies and the type-checking engine
- The document scanner that drives all of the above

Data Flow: Wiki dump -> InfoboxScanner -> FactSink
"""
