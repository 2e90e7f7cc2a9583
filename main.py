#!/usr/bin/env python3
"""zin - a small modal text editor.

Usage:
    python main.py <filename>

Modes:
    Normal   i: insert  v: visual  p: paste  dd: delete line  o: open line
             n/b: next/previous match  :  command line
    Insert   ESC: back to Normal; type, Backspace and Enter edit the text
    Visual   arrows extend the selection, y: yank, ESC: cancel
    Command  :q quit  :E write  :F <term> find
"""

from zin.__main__ import main


if __name__ == "__main__":
    main()
