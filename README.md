# voicedictation

Building blocks for a voice dictation setup on Wayland desktops. It covers
clean-up of transcribed text, a simple voice activity detector, a personal
word list for spell checking, and tracking of the active Hyprland monitor.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Text post-processing

Each processor has a `process(text)` method that returns the new text.

- `voicedictation.acronym.AcronymProcessor` joins spelled-out letters into
  known acronyms. It matches sequences of 2 to 5 letters, and the longest
  match wins. You can pass your own set of acronyms.
- `voicedictation.punctuation.PunctuationProcessor` capitalizes the first
  word, every word after `.`, `?` or `!`, and the pronoun "i" (also in
  contractions such as "i'm"). Words are re-joined with single spaces.
- `voicedictation.sanitize.SanitizationProcessor` strips ANSI escape
  sequences and control, zero-width, bidi and variation-selector characters.
  For `AppCategory.TERMINAL` it also backslash-escapes `$`, `` ` ``, `\` and
  `!`. The helpers `strip_ansi_escapes`, `strip_control_chars`,
  `escape_shell_chars` and `rules_for_category` are available on their own.

```python
from voicedictation.acronym import AcronymProcessor
from voicedictation.punctuation import PunctuationProcessor
from voicedictation.sanitize import SanitizationProcessor
from voicedictation.window_detect import AppCategory, parse_app_category

text = AcronymProcessor().process("the a p i works. i think so")
PunctuationProcessor().process(text)
# 'The API works. I think so'

SanitizationProcessor(AppCategory.TERMINAL).process("echo $HOME")
# 'echo \\$HOME'

parse_app_category("term")   # AppCategory.TERMINAL
```

`get_focused_app_category()` is a coroutine. It always returns
`AppCategory.GENERAL`, because the category is set by configuration only.

## Voice activity detection

```python
from voicedictation.vad import DbThresholdVad, calculate_rms, rms_to_db

vad = DbThresholdVad(-40.0)
vad.process([0] * 512)   # False: silence
rms_to_db(32768.0)       # 0.0 dB, full scale
```

`create_vad(...)` always returns a `DbThresholdVad`. No neural detector is
available, so a request for one falls back to the dB threshold with a
warning. `ensure_silero_model(model_dir)` downloads the Silero VAD model file
if needed and checks its SHA-256 digest (see also `verify_sha256`).

## User dictionary

`voicedictation.user_dictionary.UserDictionary` combines an editable
application word list with a read-only Hunspell personal dictionary.
Lookups ignore case (`"Word" in dictionary`). `add` and `remove` write the
word list back to disk at once.

`load_user_dictionary()` reads `user_words.txt` from the user data
directory. It also reads `~/.hunspell_<locale>` or `~/.hunspell_default`
when either exists.

## Active monitor tracking

`voicedictation.monitor` talks to Hyprland over its IPC sockets:

- `get_active_monitor_sync()` asks for the focused monitor.
- `spawn_active_monitor_listener(reload_flag)` starts a background thread
  that follows focused-monitor events. It can set a `threading.Event`
  whenever the monitor changes.
- `get_active_monitor()` returns the name the thread last recorded.

After repeated connection failures, a `CircuitBreaker` pauses the retries.

```python
from voicedictation.monitor import parse_monitor_event

parse_monitor_event("focusedmon>>DP-1,2")   # 'DP-1'
```

## Models

`voicedictation.models` lists the speech models the engine offers (only
`parakeet:default`) and gives a short engine summary.

## What this package does not do

It has no command-line tool and no daemon. It does not record audio,
transcribe speech or show an on-screen overlay. It does not talk to a
running dictation daemon either. The modules above are libraries to be
used from your own code.