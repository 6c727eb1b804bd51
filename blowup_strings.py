help_string = '''
Available things:
 Checks:
   Type a die and a DC to get the chance of meeting or beating the DC, eg d6 12.
   Dice explode: rolling the max on a die moves you up the ladder
   (d4 -> d6 -> d8 -> d10 -> d12 -> d20) and adds another roll. d20s explode into d20s.
   Ex: d4 9, d6 >= 12, 1d8 30

 Turbo tokens:
   Add a number of turbo tokens after the DC. Each token adds 1 to a roll, and
   tokens are spent to force explosions whenever a roll needs to explode.
   Ex: d6 12 3, d6 12 t3, d6 >= 12 with 3 tokens

 report:
   Prints markdown tables of the chance of beating every DC from 1 to 80 with every die,
   one table for each number of turbo tokens from 0 to 5.
   Syntax: report [max tokens] [max dc]
   Ex: report, report 2, report 3 40

 curve:
   Plots the chance of success against the DC for one die.
   Syntax: curve die [tokens]
   Ex: curve d8, curve d8 2

 roll:
   Plots the distribution of the total of an exploding roll.
   Syntax: roll die [largest total]
   Ex: roll d4, roll d4 40'''

report_help = '''
Syntax: report [max tokens] [max dc]
Prints one markdown table per number of turbo tokens, from 0 to max tokens
(default 5). Each table has a row for every DC from 1 to max dc (default 80)
and a column for every die, holding the chance of success as a percentage.
The tables can be pasted straight into a markdown document.'''
