"""
Command groups for the didsign CLI.
"""
