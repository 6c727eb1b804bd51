#!/usr/bin/env python3
'''
Calculates the odds of beating a DC in Never Stop Blowing Up.
This module can be run by executing the main() function, which activates REPL
functionality. It also provides an API of sorts, in the form of the "handle"
function, which allows you to do things like
    curve, f = handle('curve d6 2')
    f.show()
to get a nice plot.
'''
from numbers import Real
import numpy as np
from die import Die, parse_die, explosion_pmf
from blowup_functions import check, success_curve, PRINT_PROBABILITIES
from report import report, format_percent, MAX_DC, MAX_TURBO_TOKENS
import blowup_strings
import sys
# matplotlib is slow to import and isn't needed until the first plot,
# so it's imported in the background while the user types.
plt = None
import threading
import re
import warnings
import traceback

plt_initialized = False
def import_plt():
    global plt
    global plt_initialized
    import matplotlib.pyplot as plt
    plt_initialized = True
import_thread = threading.Thread(target=import_plt, name='import matplotlib')
import_thread.start()

__all__ = ['main', 'handle', 'plot_curve', 'plot_pmf', 'process_input',
           'parse_command', 'Die']

# Token-model caches grow with the DC, so very large reports get a warning.
MAX_REPORT_DC = 500

_die = r'(1?d[1-9][0-9]*|[1-9][0-9]*)'
check_regexp = re.compile(
    _die + r'(?:\s*>=\s*|\s+)(-?[0-9]+)'
    r'(?:\s+(?:with\s+)?t?([0-9]+)(?:\s+tokens?)?)?')
report_regexp = re.compile(r'report(?:\s+([0-9]+))?(?:\s+([0-9]+))?')
curve_regexp = re.compile(r'curve\s+' + _die + r'(?:\s+t?([0-9]+))?')
roll_regexp = re.compile(r'roll\s+' + _die + r'(?:\s+([0-9]+))?')

def _large_dc(max_dc: int):
    if max_dc > MAX_REPORT_DC:
        warnings.warn(f'DC {max_dc} is above {MAX_REPORT_DC}, this may be slow')

def parse_command(text: str) -> tuple[str, tuple]:
    '''
    Internal function. Works out which command text is and pulls out its
    arguments. Returns (command, args), where command is one of 'check',
    'report', 'curve' and 'roll'. Raises ValueError if text isn't a command.
    '''
    text = re.sub(r'\s+', ' ', text.lower().strip())
    if match := check_regexp.fullmatch(text):
        tokens = int(match.group(3)) if match.group(3) else 0
        return 'check', (parse_die(match.group(1)), int(match.group(2)), tokens)
    if match := report_regexp.fullmatch(text):
        max_tokens = int(match.group(1)) if match.group(1) else MAX_TURBO_TOKENS
        max_dc = int(match.group(2)) if match.group(2) else MAX_DC
        return 'report', (max_dc, max_tokens)
    if match := curve_regexp.fullmatch(text):
        tokens = int(match.group(2)) if match.group(2) else 0
        return 'curve', (parse_die(match.group(1)), tokens)
    if match := roll_regexp.fullmatch(text):
        max_total = int(match.group(2)) if match.group(2) else MAX_DC
        return 'roll', (parse_die(match.group(1)), max_total)
    raise ValueError(f'{text!r} is not a valid input')

def process_input(text: str) -> float|str|np.ndarray:
    '''
    Evaluates a single command.
    Checks like "d6 12 3" return a probability, "report" returns the report
    text, and "curve d6" and "roll d6" return numpy arrays (the success
    curve and the distribution of the roll, respectively).
    '''
    command, args = parse_command(text)
    if command == 'check':
        d, dc, tokens = args
        return check(d, dc, tokens)
    if command == 'report':
        max_dc, max_tokens = args
        _large_dc(max_dc)
        return report(max_dc, max_tokens)
    if command == 'curve':
        d, tokens = args
        return success_curve(d, tokens, MAX_DC)
    d, max_total = args
    _large_dc(max_total)
    return explosion_pmf(d, max_total)

def _new_figure(name: str):
    global plt_initialized, plt
    # If matplotlib isn't imported yet, we wait
    if not plt_initialized:
        import_thread.join()
        plt_initialized = True
    assert plt is not None
    fig, ax = plt.subplots()
    if fig.canvas.manager is not None:
        fig.canvas.manager.set_window_title(name)
    return fig, ax

def plot_curve(curve: np.ndarray, name: str) -> 'matplotlib.figure.Figure': # type: ignore
    '''
    Internal function. Plots a success curve, as returned by success_curve.
    curve: A numpy array, curve[dc] is the probability of beating dc
    name: A title for the plot.
    '''
    fig, ax = _new_figure(name)
    plt.title('Chance of success for ' + name)
    x = np.arange(len(curve))
    ax.step(x, curve*100, where='mid', color='tab:blue')
    ax.set_xlabel('DC')
    ax.set_ylabel('Chance of success (%)')
    ax.set_ylim(-5, 105)
    return fig

def plot_pmf(pmf: np.ndarray, name: str) -> 'matplotlib.figure.Figure': # type: ignore
    '''
    Internal function. Plots the distribution of an exploding roll, as returned
    by explosion_pmf, along with its cumulative distribution.
    '''
    fig, ax = _new_figure(name)
    plt.title('Distribution of ' + name)
    x = np.arange(len(pmf))
    # Long tails get smaller markers to reduce clutter.
    threshold_small_heads = 100
    if len(pmf) < threshold_small_heads:
        ax.stem(x, pmf, label='Probability', basefmt='')
    else:
        ax.stem(x, pmf, label='Probability', markerfmt='.', basefmt='')
    ax.tick_params(axis='y', labelcolor='tab:blue')
    ax2 = ax.twinx()
    ax2.set_ylim(-.05, 1.05)
    ax2.plot(x, np.cumsum(pmf), 'tab:red', label='Cumulative')
    ax2.tick_params(axis='y', labelcolor='tab:red')
    fig.legend()
    return fig

def handle(text: str) -> 'tuple[float|str|np.ndarray, matplotlib.figure.Figure|None]': # type: ignore
    '''
    text: A command, such as "d6 12 3" or "curve d8"
    Returns (x, f) where x is the result of process_input(text) and f is a
    matplotlib figure for commands that produce something to plot, None
    otherwise.
    Ex:
    curve, f = handle('curve d8 2')
    f.savefig('d8.png')
    '''
    command, args = parse_command(text)
    x = process_input(text)
    if command == 'curve':
        d, tokens = args
        return x, plot_curve(x, f'{d} with {tokens} turbo tokens')
    if command == 'roll':
        return x, plot_pmf(x, f'exploding {args[0]}')
    return x, None

def _show(text: str):
    '''Internal function, evaluates text and prints or plots the result.'''
    x, fig = handle(text)
    if fig is not None:
        print('Plotting in other window. That window must be closed to continue.')
        plt.show()
    elif isinstance(x, Real):
        print('Probability:', format_percent(x))
    else:
        print(x)

def main():
    '''
    Starts an interactive session where the user can type in checks
    such as d6 12, and the result will be printed. Only intended for use through
    a terminal, using elsewhere may lead to strange results.
    '''
    if len(sys.argv) > 1:
        text = ' '.join(sys.argv[1:])
        try:
            _show(text)
        except ValueError:
            print('Not a valid input.')
            traceback.print_exc()
        except Exception:
            print('Error encountered, aborting input.')
            traceback.print_exc()
        exit()
    PRINT_PROBABILITIES[0] = True
    print('Getting started: Try typing d6 12 or d6 12 3.')
    while True:
        print('\nEnter q to quit. Enter help for options.')
        text = input('>>').lower().strip()
        text = re.sub(r'\s+', ' ', text)
        if text in ('q', 'quit', 'exit'):
            break
        if text in ('?', 'h', 'help'):
            print(blowup_strings.help_string)
            continue
        if text in ('help report', 'h report', '?report', '? report'):
            print(blowup_strings.report_help)
            continue
        if len(text) > 0 and not text.isspace():
            try:
                _show(text)
            except ValueError:
                print('Not a valid input.')
                traceback.print_exc()
            except Exception:
                print('Error encountered, aborting input.')
                traceback.print_exc()


if __name__ == '__main__':
    print('\33]0;Never Stop Blowing Up\a', end='')
    sys.stdout.flush()
    main()
