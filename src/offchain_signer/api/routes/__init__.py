"""HTTP routes of the signing service."""
