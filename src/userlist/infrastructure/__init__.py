"""Infrastructure layer — access to the remote user listing service.

Infrastructure may import from domain but never from services,
commands, or output.
"""
