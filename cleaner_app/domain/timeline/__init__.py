"""Timeline Domain - date groups filtered by view mode"""
