'''Die ladder and the distribution of an exploding roll'''
from enum import Enum
import numpy as np
import re

class Die(Enum):
    '''
    The dice of Never Stop Blowing Up. A skill starts at a d4; rolling the
    maximum on a die "explodes" it into the next die up the ladder, which is
    rolled and added on. The ladder stops at the d20, which explodes into itself.
    '''
    D4 = 4
    D6 = 6
    D8 = 8
    D10 = 10
    D12 = 12
    D20 = 20

    @property
    def faces(self) -> int:
        '''The number of sides on the die.'''
        return self.value

    def next(self) -> 'Die':
        '''Returns the next die up the ladder, saturating at a d20.'''
        ladder = list(Die)
        i = ladder.index(self)
        return ladder[min(i+1, len(ladder)-1)]

    def __str__(self) -> str:
        return f'd{self.value}'

def parse_die(text: str) -> Die:
    '''
    Converts text like "d6", "D6", "1d6" or "6" into a Die.
    Raises ValueError for anything that isn't on the ladder.
    '''
    match = re.fullmatch(r'\s*(?:1?d)?([1-9][0-9]*)\s*', str(text), re.IGNORECASE)
    if not match:
        raise ValueError(f'{text!r} is not a die')
    faces = int(match.group(1))
    try:
        return Die(faces)
    except ValueError:
        sizes = ', '.join(str(d) for d in Die)
        raise ValueError(f'{text!r} is not one of {sizes}') from None

def explosion_pmf(d: Die, max_total: int) -> np.ndarray:
    '''
    Returns the distribution of the total of an exploding roll of d.
    d: A Die
    max_total: A non-negative integer, the largest total to keep track of.
    Returns a numpy array arr of length max_total+1, where arr[k] is the
    probability that the roll totals exactly k. Totals above max_total are
    dropped, so arr sums to less than 1 whenever they're possible.
    Ex: explosion_pmf(Die.D4, 6) is [0, .25, .25, .25, 0, .25/6, .25/6]
    '''
    if max_total < 0:
        raise ValueError('explosion_pmf(): max_total must be >= 0')
    faces = d.faces
    arr = np.zeros(max_total+1)
    # Every face but the top one ends the roll, the top one explodes.
    arr[1:faces] = 1/faces
    if max_total > faces:
        arr[faces:] = explosion_pmf(d.next(), max_total-faces) / faces
    return arr
