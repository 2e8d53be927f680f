"""Domain models shared by the decoding and classification services."""
