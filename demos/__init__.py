"""Demos module - Watch and benchmark the agents"""
