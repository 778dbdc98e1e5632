"""Shared fixtures for the draxt test suite."""

import pytest

from draxt.testing import build_tree, link


@pytest.fixture
def sample_tree(tmp_path):
    """Create the directory tree most query tests run against.

    Structure:
        root
        ├── a.js
        ├── another_example_file.md
        ├── b.md -> another_example_file        (broken link)
        ├── example_file.md
        └── another_dir
            ├── .dir/
            ├── README.md
            ├── a.js
            ├── b.js
            ├── c.php
            ├── d.html
            ├── document.txt
            ├── foo.rb
            ├── g.md -> ../example_file.md
            └── k.php
    """
    root = tmp_path / 'draxt_test_dir'
    build_tree(root, {
        'example_file.md': '# example',
        'another_example_file.md': '# another example',
        'a.js': 'console.log(1);',
        'b.md': link('another_example_file'),
        'another_dir': {
            'a.js': '',
            'b.js': '',
            'c.php': '<?php',
            'k.php': '<?php',
            'd.html': '<html></html>',
            'README.md': '# readme',
            'foo.rb': '',
            'document.txt': 'text',
            'g.md': link('../example_file.md'),
            '.dir': {},
        },
    })
    return root
