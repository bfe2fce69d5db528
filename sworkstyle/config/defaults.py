"""
Built-in icon table.

Glyphs are Nerd Font / Font Awesome code points. User entries from
config.toml are matched before these.
"""

DEFAULT_FALLBACK = ""  # question-circle

DEFAULT_MATCHING = {
    # Browsers
    "/(?i)Github.*Firefox/": "",
    "firefox": "",
    "org.mozilla.firefox": "",
    "Firefox": "",
    "chromium": "",
    "Chromium": "",
    "google-chrome": "",
    "Google-chrome": "",
    "brave-browser": "",
    # Terminals
    "Alacritty": "",
    "kitty": "",
    "foot": "",
    "org.wezfurlong.wezterm": "",
    "com.mitchellh.ghostty": "",
    "/^n?vim?\\b/": "",
    # Editors
    "code": "",
    "Code": "",
    "code-url-handler": "",
    "jetbrains-idea": "",
    "emacs": "",
    # Chat
    "discord": "",
    "Slack": "",
    "org.telegram.desktop": "",
    "TelegramDesktop": "",
    "thunderbird": "",
    # Media
    "mpv": "",
    "vlc": "",
    "Spotify": "",
    "spotify": "",
    "pavucontrol": "",
    "org.pulseaudio.pavucontrol": "",
    "gimp": "",
    "Gimp": "",
    # Files and documents
    "org.gnome.Nautilus": "",
    "thunar": "",
    "Thunar": "",
    "org.pwmt.zathura": "",
    "evince": "",
    "libreoffice-writer": "",
    "libreoffice-calc": "",
    # Games
    "steam": "",
    "/Steam/": "",
    # Misc
    "org.keepassxc.KeePassXC": "",
    "KeePassXC": "",
}
