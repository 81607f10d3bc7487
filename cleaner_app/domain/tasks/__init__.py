"""
Tasks Domain

Backend task records (schemas), canonical task dates and skip reasons
(partition), and the per-session fetch-through cache (service).
"""
