from setuptools import setup, find_packages

setup(
    name="text_editor",
    version="0.1.0",
    packages=find_packages(include=["text_editor", "text_editor.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pyyaml",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "text-editor=text_editor.cli:main",
        ],
    },
    description="A file-editing tool for agents: view, write, str_replace and undo_edit.",
)
