"""snipsync: keep documentation in sync with source code snippets.

Snippets are captured from source files between read markers:
    # :snippet-start: example-id
    ...
    # :snippet-end:

and spliced into target documents between write markers:
    <!-- :replace-start: example-id {"enable_source_link": true} -->
    ...
    <!-- :replace-end: -->

Anything outside the write markers is preserved untouched.
"""

__version__ = "0.3.0"
