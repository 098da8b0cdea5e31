"""Core domain package for chatlink.

Core contains link scanning, resolution, and message ordering logic without
any transport, storage, or rendering code, keeping the parsing rules portable.
"""
