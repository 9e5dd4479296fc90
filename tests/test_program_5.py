from pathlib import Path
from rdexpr.__main__ import main

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_5_increments(capsys):
    """Test program 5: mixed postfix and prefix increments.

    `i++` yields the old value 0 and leaves i at 1, then `++i` moves i to 2
    and yields 2, so j ends up as 2 and the final line is 2 * 10 + 2.
    """
    main([str(EXAMPLES / 'program_5.rdx')])
    out = capsys.readouterr().out.strip()
    assert out == '22'
