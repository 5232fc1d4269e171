# ABOUTME: Infobox fact extraction: wiki markup templates to type-checked subject-relation-object facts
# ABOUTME: Package root; the command line entry point lives in infobox_facts.main

__version__ = "0.1.0"
