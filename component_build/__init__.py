"""Build component directories into a script bundle, a stylesheet and copied assets."""
