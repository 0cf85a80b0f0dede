"""
Session engine: keymap, input buffer, transcript viewport, response generation and the controller.
"""
