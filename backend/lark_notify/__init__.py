"""Lark (Feishu) incoming webhook notification task."""
