'''User-facing probability functions'''
from functools import cache
import numpy as np
from die import Die

PRINT_PROBABILITIES = [False]

def probability_of_success(d: Die, dc: int) -> float:
    '''
    Returns the probability of meeting or beating dc with an exploding roll of d,
    without spending any turbo tokens.
    When a roll comes up as the die's maximum, the die explodes: the player moves
    up to the next die on the ladder and rolls again, adding the new roll to the
    maximum. This continues up to the d20, which keeps rerolling itself until it
    stops rolling 20s.
    d: A Die
    dc: An integer, the difficulty class
    '''
    if not isinstance(d, Die):
        raise TypeError(f'Expected a Die, got {d!r}')
    # Can always roll a 1 or higher.
    if dc <= 1:
        return 1.0
    faces = d.faces
    if dc <= faces:
        return (faces - dc + 1) / faces
    # The only way to reach dc is to roll the max and explode.
    return probability_of_success(d.next(), dc - faces) / faces

def probability_of_success_with_tokens(d: Die, tokens: int, dc: int) -> float:
    '''
    Returns the probability of meeting or beating dc with an exploding roll of d
    when the player holds some turbo tokens.
    Each token adds 1 to a roll. A player with enough tokens to bring a roll up to
    the die's maximum can explode the die that way, and is assumed to always do so
    when the die has to explode to reach dc. Tokens spent forcing one explosion
    can't be spent later in the same roll.
    d: A Die
    tokens: A non-negative integer, the number of turbo tokens available
    dc: An integer, the difficulty class
    '''
    if not isinstance(d, Die):
        raise TypeError(f'Expected a Die, got {d!r}')
    if tokens < 0:
        raise ValueError('Number of turbo tokens must be non-negative')
    return _with_tokens(d, int(tokens), int(dc))

@cache
def _with_tokens(d: Die, tokens: int, dc: int) -> float:
    '''
    Internal function, implements probability_of_success_with_tokens.
    Every subproblem is keyed on (d, tokens, dc), so the cache keeps the
    branching over rolls from blowing up at high DCs.
    '''
    if dc <= 1:
        return 1.0
    faces = d.faces
    if dc <= faces:
        # Tokens turn the rolls just below dc into successes too.
        return min(faces - dc + 1 + tokens, faces) / faces
    out = np.zeros(faces)
    for roll in range(1, faces+1):
        if roll + tokens < faces - 1:
            # Can't explode even with every token, so dc is out of reach.
            continue
        needed = max(faces - roll - 1, 0)
        out[roll-1] = _with_tokens(d.next(), tokens - needed, dc - roll)
    # Rounding in the sum can push a certain success a hair over 1.
    return min(float(np.sum(out)) / faces, 1.0)

def check(d: Die, dc: int, tokens: int = 0) -> float:
    '''
    Returns the probability of an ability check with die d succeeding against dc.
    tokens (optional): The number of turbo tokens the player is willing to spend.
    '''
    if tokens:
        p = probability_of_success_with_tokens(d, tokens, dc)
    else:
        p = probability_of_success(d, dc)
    if PRINT_PROBABILITIES[0]:
        print(f'P[{d} >= {dc}, {tokens} tokens] = {p}')
    return p

def success_curve(d: Die, tokens: int = 0, max_dc: int = 80) -> np.ndarray:
    '''
    Returns a numpy array out of length max_dc+1, where out[dc] is the
    probability of beating dc with die d and the given number of tokens.
    '''
    if max_dc < 0:
        raise ValueError('success_curve(): max_dc must be >= 0')
    if tokens:
        return np.array([probability_of_success_with_tokens(d, tokens, dc)
                         for dc in range(max_dc+1)])
    return np.array([probability_of_success(d, dc) for dc in range(max_dc+1)])
