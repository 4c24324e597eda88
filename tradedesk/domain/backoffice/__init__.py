"""
Back-office bounded context: domain layer.

Content pages published by administrators and key/value platform settings.
"""
