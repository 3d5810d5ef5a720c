"""HTTP surface exposing the redeem operation."""
