# snitchkit

Building blocks for a small unit-testing framework, with no dependencies
outside the standard library.

## Modules

- `snitchkit.fixed_point` holds `UnsignedFixed`, a non-negative decimal
  number `digits * 10**exponent` with 64-bit digits that supports `+` and `*`.
  `to_bits(value, single=False)` splits a float into its IEEE 754 fields and
  returns a `FloatBits`. `to_fixed(bits)` turns those fields into a
  `SignedFixedData`, which holds the decimal digits, the exponent and the sign.
  `FloatTraits`, `DOUBLE_TRAITS` and `FLOAT_TRAITS` describe the binary64 and
  binary32 layouts.
- `snitchkit.append` holds `SmallString`, a text buffer of fixed capacity.
  `append(*values)` adds the display text of each value in turn. When a value
  does not fit, it keeps what fits, stops and returns `False`. The module also
  has these formatting helpers:
  - `format_float(value, precision=None, single=False)` writes scientific
    notation. It uses 16 significant digits for doubles and 7 for singles by
    default, never more than 19, and rounds half to even. It produces `inf`,
    `-inf` and `nan` for the special values.
  - `format_int(value, base=10)` writes an integer in any base from 2 to 16.
  - `to_display(value)` gives the text shown for `None`, booleans, integers,
    floats, strings, enums and callables. Any other type raises `TypeError`.
  - `num_digits`, `num_exp_digits`, `num_fixed_digits`, `round_half_to_even`,
    `set_precision` and `format_fixed` are the lower-level pieces behind them.
- `snitchkit.string_utility` provides three functions:
  - `replace_all(string, pattern, replacement, capacity=None)` returns
    `(result, fitted)`. When a capacity is given, the result is cut off at that
    many characters.
  - `find_first_not_escaped(string, char)` returns the index of the first
    occurrence of `char` that no backslash escapes, or `-1` if there is none.
  - `is_match(string, pattern)` matches a pattern in which `*` is a wildcard
    and a backslash escapes the next character.

## Example

```python
from snitchkit.append import SmallString, format_float
from snitchkit.string_utility import is_match, replace_all

s = SmallString(8)
print(s.append("hello", " ", "world"))  # False: the text was truncated
print(str(s))                           # "hello wo"

print(format_float(1.5))                # "1.500000000000000e+00"
print(is_match("how are you", "*are you"))  # True
print(replace_all("a-b", "-", "--"))    # ('a--b', True)
```

## What this package does not do

This package does not register, run or report tests. It has no command-line
interface, no assertion helpers and no tracking of the test that is running.
It provides only the string, formatting and matching pieces listed above.

## Running the tests

```
pip install -e .[test]
pytest
```