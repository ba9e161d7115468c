import os, json

CONFIG_PATH = os.getenv("NOTES_CONFIG", "./data/config.json")

DEFAULT_CONFIG = {

    "notes": {
        "dir": "notes",                  # ノートのルートディレクトリ
        "atomic_write": False            # 一時ファイル + rename で書き込む
    },
    "logging": {
        "level": "INFO"
    },
    "cors": {
        "allow_origins": ["*"]
    },
}


def load_config(path=None):

    path = path or CONFIG_PATH
    config_dir = os.path.dirname(path)
    if config_dir:
        os.makedirs(config_dir, exist_ok=True)

    if not os.path.exists(path):

        with open(path, "w") as f:
            json.dump(DEFAULT_CONFIG, f, indent=2)

        config = json.loads(json.dumps(DEFAULT_CONFIG))

    else:

        with open(path) as f:

            try:
                config = json.load(f)
            except json.JSONDecodeError:
                config = json.loads(json.dumps(DEFAULT_CONFIG))

        for k, v in DEFAULT_CONFIG.items():
            config.setdefault(k, v)

    # 環境変数で上書き
    notes_dir = os.getenv("NOTES_DIR", "").strip()
    if notes_dir:
        config["notes"] = {**config["notes"], "dir": notes_dir}

    return config


def notes_root(config) -> str:
    """ノートのルートを絶対パスで返す"""
    return os.path.abspath(config["notes"].get("dir", "notes"))
