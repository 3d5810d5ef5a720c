"""
Domain layer for the TW Angpao adaptor.

Contains the request payloads, the uniform response envelope and the typed
views of upstream voucher data.
"""
