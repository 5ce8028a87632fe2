"""Input stages.

This package feeds resource identifiers into the pipeline and reads
their content as ordered lines for the decoding stage.
"""
