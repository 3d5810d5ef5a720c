"""
Infrastructure components for the TW Angpao adaptor.
"""
