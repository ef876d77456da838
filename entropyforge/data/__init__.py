"""Package data: the embedded Diceware word list (``words.json``)."""
