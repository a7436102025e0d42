"""
Built-in Instruction Table
==========================

The base instruction set, in display order (top of the in-game listing
first, opcode 0 last). Only base instructions and field layout rows are
listed here; the i1/i2/i12 immediate variants are generated by the
expander.

Field Layout Rows
-----------------
Rows containing '2' are not instructions. They mark the bit regions the
decoder uses:

    COND    - condition field of the jump instructions
    I_ARG2  - second argument immediate flag
    MEM     - memory (read/write/push/pop) group
    I_ARG1  - first argument immediate flag

Instruction Groups (bits 2-7)
-----------------------------
    0000xx  add, sub, and, or
    0001xx  not, xor, shr, shl
    0100xx  read, write, pop, push
    1000xx  jeq, jneq, jlt, jlteq
    1001xx  jgt, jgteq
"""

BUILTIN_TABLE = """
2212222222COND
2122222211I_ARG2
2001222233MEM
1222222200I_ARG1
0010010137jgteq
0010010037jgt
0010001137jlteq
0010001037jlt
0010000137jneq
0010000037jeq
0001001147push
0001001047pop
0001000147write
0001000047read
0000011157shl
0000011057shr
0000010157xor
0000010057not
0000001157or
0000001057and
0000000157sub
0000000057add
"""
