"""Queued SMTP sending and plain mail bodies."""