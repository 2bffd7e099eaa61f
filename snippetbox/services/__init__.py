# Services package init
"""
Snippetbox — Services Layer
============================

Service Inventory:
    - SnippetStore: Insert / Get / Latest against the snippets table
"""
