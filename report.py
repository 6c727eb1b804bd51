'''
Tables of success chances for every die, in the format of the original
Never Stop Blowing Up calculator: one markdown table per number of turbo tokens,
one row per DC, one column per die.
'''
import numpy as np
from die import Die
from blowup_functions import probability_of_success_with_tokens

DICE = tuple(Die)
MAX_DC = 80
MAX_TURBO_TOKENS = 5

def probability_table(tokens: int, max_dc: int = MAX_DC, dice=DICE) -> np.ndarray:
    '''
    Returns a numpy array of shape (max_dc, len(dice)) where entry [i, j] is the
    probability of beating DC i+1 with dice[j] and the given turbo tokens.
    '''
    out = np.zeros((max_dc, len(dice)))
    for i in range(max_dc):
        for j, d in enumerate(dice):
            out[i, j] = probability_of_success_with_tokens(d, tokens, i+1)
    return out

def format_percent(p: float) -> str:
    '''Formats a probability as a percentage, eg 0.25 -> "25.000000%"'''
    return f'{p * 100:.6f}%'

def markdown_table(tokens: int, max_dc: int = MAX_DC, dice=DICE) -> str:
    '''
    Returns the table for the given number of turbo tokens as a markdown string.
    Every column is padded to the width of its widest cell.
    '''
    probs = probability_table(tokens, max_dc, dice)
    rows = [['DC'] + [str(d) for d in dice]]
    for i, row in enumerate(probs):
        rows.append([str(i+1)] + [format_percent(p) for p in row])
    widths = [max(len(row[k]) for row in rows) for k in range(len(rows[0]))]
    def render(row):
        cells = (format(cell, f'<{w}') for cell, w in zip(row, widths))
        return '| ' + ' | '.join(cells) + ' |'
    lines = [render(rows[0])]
    lines.append('|' + '|'.join('-'*(w+2) for w in widths) + '|')
    lines += [render(row) for row in rows[1:]]
    return '\n'.join(lines)

def report(max_dc: int = MAX_DC, max_tokens: int = MAX_TURBO_TOKENS, dice=DICE) -> str:
    '''
    Returns the full report: a "## N turbo tokens" section with a table for every
    token count from 0 to max_tokens.
    '''
    sections = []
    for tokens in range(max_tokens+1):
        sections.append(f'## {tokens} turbo tokens\n\n'
                        f'{markdown_table(tokens, max_dc, dice)}\n')
    return '\n'.join(sections)
