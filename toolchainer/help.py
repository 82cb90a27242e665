"""Long help texts shown by the command line tool."""

_PROG = "rustup"


def _discussion(body: str) -> str:
    """Prefix a help body with the common section heading."""
    return "DISCUSSION:\n" + body.strip("\n")


RUSTUP_HELP = _discussion(
    f"""
    {_PROG} installs the Rust toolchain from the official release
    channels. It lets you move between the stable, beta and nightly
    compilers, keeps each of them up to date, and ships prebuilt
    standard libraries for the common platforms, which makes
    cross-compilation easier.

    Newcomers to the language can start with `{_PROG} doc --book`.
"""
)

SHOW_HELP = _discussion(
    """
    Prints which toolchain is active and which `rustc` version it
    provides.

    Any extra compilation targets installed for the active toolchain
    are printed too, and when more than one toolchain is installed,
    every installed toolchain is listed.
"""
)

SHOW_ACTIVE_TOOLCHAIN_HELP = _discussion(
    """
    Prints only the name of the toolchain that is currently active,
    which makes it convenient to call from scripts.

    To find the sysroot, run `rustc --print sysroot`; to find the
    compiler version, run `rustc --version`.
"""
)

UPDATE_HELP = _discussion(
    f"""
    Without a toolchain argument, `update` refreshes every installed
    toolchain from its release channel and afterwards updates
    {_PROG} itself.

    With a toolchain argument, only that toolchain is updated, exactly
    as `{_PROG} toolchain install` would do.
"""
)

INSTALL_HELP = _discussion(
    f"""
    Installs the named Rust toolchain.

    `install` behaves the same as `{_PROG} update <toolchain>`.
"""
)

DEFAULT_HELP = _discussion(
    """
    Makes the given toolchain the default one, installing it first
    when it is not installed yet.
"""
)

TOOLCHAIN_HELP = _discussion(
    f"""
    A *toolchain* is one installation of the Rust compiler, and many
    `{_PROG}` commands operate on toolchains. Several kinds exist.
    The simplest follow the release channels 'stable', 'beta' and
    'nightly'; others come from the dated archives, target a
    different host platform, or are local builds.

    Names of release channel toolchains are built like this:

        <channel>[-<date>][-<host>]

        <channel>       = stable|beta|nightly|<version>
        <date>          = YYYY-MM-DD
        <host>          = <target-triple>

    The channel is a release channel name or a version number such as
    '1.8.0'. Adding a date, for example 'nightly-2017-05-09', selects
    the archived build published on that day.

    A target triple as host is handy for running a 32-bit compiler on
    a 64-bit system, or for choosing the MSVC-based toolchain on
    Windows:

        $ {_PROG} toolchain install stable-x86_64-pc-windows-msvc

    Parts of the triple that are left out are filled in
    automatically, so this is equivalent:

        $ {_PROG} toolchain install stable-msvc

    `{_PROG} default` installs a toolchain and makes it the default
    in one step:

        $ {_PROG} default stable-msvc

    Locally built toolchains, common when working on the compiler
    itself, can be added as symlinks; see
    `{_PROG} toolchain help link`.
"""
)

TOOLCHAIN_LINK_HELP = _discussion(
    f"""
    'toolchain' is the name given to the linked toolchain. Any name
    is accepted unless it fully matches the start of a standard
    release channel name: 'latest' or '2017-04-01' are fine, while
    'stable', 'beta-i686' or 'nightly-x86_64-unknown-linux-gnu' are
    rejected.

    'path' is the directory that holds the toolchain's binaries and
    libraries. When hacking on the compiler, a stage of the build
    directory can be linked and then used like this:

        $ {_PROG} toolchain link latest-stage1 build/x86_64-unknown-linux-gnu/stage1
        $ {_PROG} override set latest-stage1

    From then on, building in that directory uses 'latest-stage1'.
"""
)

OVERRIDE_HELP = _discussion(
    f"""
    An override tells {_PROG} to use a particular toolchain whenever
    it runs inside a particular directory.

    Set one with `{_PROG} override`. Running `rustc`, `cargo` or any
    other proxied tool in that directory, or below it, then uses the
    override toolchain.

    Pinning a nightly build:

        $ {_PROG} override set nightly-2014-12-18

    Pinning a stable release:

        $ {_PROG} override set 1.0.0

    `{_PROG} show` reports the active toolchain, and
    `{_PROG} override unset` returns to the default toolchain.
"""
)

OVERRIDE_UNSET_HELP = _discussion(
    """
    With `--path`, the override of that directory is removed. With
    `--nonexistent`, overrides of every directory that no longer
    exists are removed. Without either, the override of the current
    directory is removed.
"""
)

RUN_HELP = _discussion(
    f"""
    Sets up the environment for the given toolchain and runs the
    given program in it. Any program may be run, not only rustc or
    cargo, so toolchains can be tried out without an override.

    Tools that {_PROG} proxies, such as `rustc` and `cargo`, also
    accept the toolchain as a first argument of the form
    `+toolchain`. These two commands do the same thing:

        $ cargo +nightly build

        $ {_PROG} run nightly cargo build
"""
)

DOC_HELP = _discussion(
    """
    Opens the documentation of the active toolchain in the default
    web browser.

    The documentation index is opened unless one of the flags selects
    a specific book or reference.
"""
)

COMPLETIONS_HELP = _discussion(
    f"""
    Generates tab completion scripts for Bash, Fish, Zsh and
    PowerShell. The script is written to `stdout`, so redirect it to
    wherever your shell expects it; the right place depends on the
    shell, the operating system and your own configuration.

    Typical setups on Unix-like systems such as GNU/Linux follow.

    BASH:

    System-wide completions usually live in `/etc/bash_completion.d/`;
    per-user ones can go into
    `~/.local/share/bash-completion/completions`:

        $ mkdir -p ~/.local/share/bash-completion/completions
        $ {_PROG} completions bash >> ~/.local/share/bash-completion/completions/{_PROG}

    Start a new login session for the completions to be picked up.

    BASH (macOS/Homebrew):

    With the `bash-completion` formula installed, Homebrew keeps the
    scripts inside its own prefix:

        $ mkdir -p $(brew --prefix)/etc/bash_completion.d
        $ {_PROG} completions bash > $(brew --prefix)/etc/bash_completion.d/{_PROG}.bash-completion

    FISH:

    Fish reads completions from `$HOME/.config/fish/completions`:

        $ mkdir -p ~/.config/fish/completions
        $ {_PROG} completions fish > ~/.config/fish/completions/{_PROG}.fish

    Start a new login session for the completions to be picked up.

    ZSH:

    Zsh looks for completions in the directories listed in `$fpath`.
    Either write the script into one of them or add a directory of
    your own; a private directory is usually the safest choice:

        $ mkdir ~/.zfunc

    Then put this in `.zshrc`, before the call to `compinit`:

        fpath+=~/.zfunc

    and write the script there:

        $ {_PROG} completions zsh > ~/.zfunc/_{_PROG}

    Log in again, or run

        $ exec zsh

    to load the new completions.

    CUSTOM LOCATIONS:

    The scripts may also be kept anywhere else, for instance in a
    directory under $HOME, as long as your login script loads them,
    e.g. with `source`. Your shell's documentation explains how.

    POWERSHELL:

    PowerShell 5.0 or later is needed; it is part of Windows 10 and
    can be installed separately on Windows 7 and 8.1.

    See whether a profile exists:

        PS C:\\> Test-Path $profile

    If that prints `False`, create one:

        PS C:\\> New-Item -path $profile -type file -force

    The profile is the file named by `$profile`; after `New-Item` it
    is
    `${{env:USERPROFILE}}\\Documents\\WindowsPowerShell\\Microsoft.PowerShell_profile.ps1`

    Append the completions to it directly, or keep them in a separate
    file that the profile sources:

        PS C:\\> {_PROG} completions powershell >> ${{env:USERPROFILE}}\\Documents\\WindowsPowerShell\\Microsoft.PowerShell_profile.ps1

    CARGO:

    A completion script for `cargo` can be generated as well. It
    sources the script that ships with the default toolchain, and
    only some shells are supported so far:

    BASH:

        $ {_PROG} completions bash cargo >> ~/.local/share/bash-completion/completions/cargo

    ZSH:

        $ {_PROG} completions zsh cargo > ~/.zfunc/_cargo
"""
)

TOOLCHAIN_ARG_HELP = (
    "Name of a toolchain, for example 'stable', 'nightly' or '1.8.0'; "
    f"run `{_PROG} help toolchain` for details"
)

TOPIC_ARG_HELP = (
    "Documentation topic, for example 'core', 'fn', 'usize', "
    "'eprintln!', 'core::arch', 'alloc::format!', 'std::fs', "
    "'std::fs::read_dir', 'std::io::Bytes', 'std::iter::Sum' "
    "or 'std::io::error::Result'"
)