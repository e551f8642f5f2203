"""Trade and currency ledger for tabletop RPG sessions."""
