"""Building user views and handling login verification codes."""