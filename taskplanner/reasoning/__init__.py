"""
Reasoning Module

Breakdown strategies, the remote-model adapter, prompts and reply parsing.
"""
