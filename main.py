import os
import threading
import webbrowser

from flask import Blueprint, Flask, current_app, jsonify, render_template_string, request, session

from generator import GenerationOptions, InvalidOptionsError, NO_CLASS_SELECTED, generate, get_rng
from history import MAX_HISTORY, PasswordHistory
from strength import score

DEFAULT_CONFIG = {
    "HISTORY_SIZE": MAX_HISTORY,
    "MAX_LENGTH": 128,
    "SECURE_RANDOM": False,
    "OPEN_BROWSER": True,
    "PORT": 8080,
    "SESSION_COOKIE_SAMESITE": "Lax",
}


def open_browser(port=8080):
    webbrowser.open(f"http://127.0.0.1:{port}/")


# --- HTML Template ---

HTML = """
<!DOCTYPE html>
<html lang="en">
<head>
    <title>SecurePass - Password Generator</title>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width,initial-scale=1">
    <link href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.3/dist/css/bootstrap.min.css" rel="stylesheet">
    <style>
        .strength-bar { height: 8px; border-radius: 4px; }
        .strength-weak { background: #dc3545; }
        .strength-fair { background: #fd7e14; }
        .strength-good { background: #ffc107; }
        .strength-strong { background: #28a745; }
        .pw-box { font-family: monospace; font-size: 1.3em; letter-spacing: 2px; }
        #history li { cursor: pointer; font-family: monospace; }
    </style>
</head>
<body class="bg-dark text-light">
<div class="container py-4">
    <h1 class="mb-3">🔐 Password Generator</h1>
    <form id="pwform" class="row g-3">
        <div class="col-md-4"><label>Length: <span id="lengthValue">{{ defaults.length }}</span></label>
            <input type="range" min="4" max="{{ max_length }}" class="form-range" name="length" id="length" value="{{ defaults.length }}">
        </div>
        <div class="col-md-2"><label>Uppercase</label>
            <input type="checkbox" name="include_uppercase" {{ "checked" if defaults.include_uppercase }}>
        </div>
        <div class="col-md-2"><label>Lowercase</label>
            <input type="checkbox" name="include_lowercase" {{ "checked" if defaults.include_lowercase }}>
        </div>
        <div class="col-md-2"><label>Numbers</label>
            <input type="checkbox" name="include_numbers" {{ "checked" if defaults.include_numbers }}>
        </div>
        <div class="col-md-2"><label>Symbols</label>
            <input type="checkbox" name="include_symbols" {{ "checked" if defaults.include_symbols }}>
        </div>
        <div class="col-md-2"><label>Exclude ambiguous</label>
            <input type="checkbox" name="exclude_ambiguous" {{ "checked" if defaults.exclude_ambiguous }}>
        </div>
        <div class="col-md-12 mt-3">
            <button class="btn btn-primary" type="submit">Generate</button>
        </div>
    </form>
    <hr>
    <div id="pwerror" class="text-danger mb-2"></div>
    <div id="pwresult" style="display:none;">
        <div class="mb-2">
            <span class="pw-box" id="pwbox"></span>
            <button class="btn btn-outline-info btn-sm" onclick="copyPw()">Copy</button>
        </div>
        <div class="mb-2">
            <div class="strength-bar" id="strengthbar"></div>
            <span id="strengthlabel"></span>
        </div>
        <div class="mb-2">
            <b>Entropy:</b> <span id="entropy"></span> bits,
            <b>Estimated crack time:</b> <span id="cracktime"></span>
        </div>
    </div>
    <h5 class="mt-4">History</h5>
    <ul id="history"></ul>
    <button class="btn btn-outline-danger btn-sm" id="clearHistory">Clear history</button>
    <footer class="mt-5 text-center">
        <small>Generated with a general-purpose pseudo-random source unless secure mode is enabled. Not suitable for high-value secrets. | &copy; 2025</small>
    </footer>
</div>
<script>
function copyPw() {
    let pw = document.getElementById("pwbox").textContent;
    navigator.clipboard.writeText(pw);
}
function formOptions() {
    let fd = new FormData(document.getElementById("pwform"));
    let data = {length: fd.get("length")};
    ["include_uppercase", "include_lowercase", "include_numbers", "include_symbols", "exclude_ambiguous"]
        .forEach(k => data[k] = !!fd.get(k));
    return data;
}
function showResult(result) {
    document.getElementById("pwerror").textContent = "";
    document.getElementById("pwbox").textContent = result.password;
    let bar = document.getElementById("strengthbar");
    bar.className = "strength-bar strength-" + result.label;
    bar.style.width = (result.score / result.max_score * 100) + "%";
    document.getElementById("strengthlabel").textContent = result.description + " (" + result.score + "/" + result.max_score + ")";
    document.getElementById("entropy").textContent = result.entropy.toFixed(2);
    document.getElementById("cracktime").textContent = result.crack_time;
    document.getElementById("pwresult").style.display = "block";
}
function showHistory(items) {
    let list = document.getElementById("history");
    list.innerHTML = "";
    if (!items.length) {
        list.innerHTML = "<small>No passwords in history</small>";
    }
    items.forEach(pw => {
        let li = document.createElement("li");
        li.textContent = pw;
        li.onclick = async () => {
            let res = await fetch("/api/strength", {
                method: "POST",
                headers: {"Content-Type":"application/json"},
                body: JSON.stringify(Object.assign(formOptions(), {password: pw}))
            });
            showResult(await res.json());
        };
        list.appendChild(li);
    });
}
async function generatePw() {
    let res = await fetch("/api/generate", {
        method: "POST",
        headers: {"Content-Type":"application/json"},
        body: JSON.stringify(formOptions())
    });
    let result = await res.json();
    if (!res.ok) {
        document.getElementById("pwerror").textContent = result.error;
        document.getElementById("pwresult").style.display = "none";
        return;
    }
    showResult(result);
    showHistory(result.history);
}
document.getElementById("pwform").onsubmit = function(e) {
    e.preventDefault();
    generatePw();
}
document.getElementById("pwform").onchange = generatePw;
document.getElementById("length").oninput = function() {
    document.getElementById("lengthValue").textContent = this.value;
}
document.getElementById("clearHistory").onclick = async function() {
    if (!confirm("Delete the whole password history?")) return;
    let res = await fetch("/api/history", {method: "DELETE"});
    showHistory((await res.json()).history);
}
generatePw();
</script>
</body>
</html>
"""

bp = Blueprint("securepass", __name__)


# --- Helpers ---

def load_history():
    # Each browser keeps its own list in its signed session cookie
    return PasswordHistory(current_app.config["HISTORY_SIZE"], session.get("history", ()))


def save_history(history):
    session["history"] = history.items()


def read_options(data):
    if not isinstance(data, dict):
        data = {}
    try:
        options = GenerationOptions.from_mapping(data)
    except (TypeError, ValueError, OverflowError):
        raise InvalidOptionsError("Length must be a whole number")
    if not options.selected():
        raise InvalidOptionsError(NO_CLASS_SELECTED)
    if options.length > current_app.config["MAX_LENGTH"]:
        raise InvalidOptionsError(f"Length must be at most {current_app.config['MAX_LENGTH']}")
    return options


# --- API routes ---

@bp.app_errorhandler(InvalidOptionsError)
def invalid_options(error):
    current_app.logger.warning("rejected options: %s", error)
    return jsonify({"error": str(error)}), 400


@bp.route("/api/generate", methods=["POST"])
def api_generate():
    options = read_options(request.get_json(silent=True))
    rng = get_rng(current_app.config["SECURE_RANDOM"])
    password = generate(options, rng)
    result = score(password, options)
    history = load_history()
    history.push(password)
    save_history(history)
    current_app.logger.info("generated password: length=%d score=%d", len(password), result.score)
    payload = result.to_dict()
    payload.update({
        "password": password,
        "history": history.items(),
    })
    return jsonify(payload)


@bp.route("/api/strength", methods=["POST"])
def api_strength():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    password = data.get("password")
    if not isinstance(password, str):
        return jsonify({"error": "password must be a string"}), 400
    # Only the class toggles feed the score, and none at all is still scorable
    options = GenerationOptions.from_mapping({k: v for k, v in data.items() if k not in ("password", "length")})
    payload = score(password, options).to_dict()
    payload["password"] = password
    return jsonify(payload)


@bp.route("/api/history", methods=["GET"])
def api_history():
    return jsonify({"history": load_history().items()})


@bp.route("/api/history", methods=["DELETE"])
def api_clear_history():
    session.pop("history", None)
    current_app.logger.info("password history cleared")
    return jsonify({"history": []})


# --- Main route ---

@bp.route("/", methods=["GET"])
def home():
    return render_template_string(
        HTML,
        defaults=GenerationOptions(),
        max_length=min(current_app.config["MAX_LENGTH"], 64),
    )


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    app.config.from_prefixed_env("SECUREPASS")
    if test_config:
        app.config.update(test_config)
    if not app.config.get("SECRET_KEY"):
        # Sessions, and with them history, reset on restart
        app.config["SECRET_KEY"] = os.urandom(32)
    app.register_blueprint(bp)
    return app


if __name__ == "__main__":
    app = create_app()
    port = app.config["PORT"]
    if app.config["OPEN_BROWSER"] and not os.environ.get("WERKZEUG_RUN_MAIN"):
        threading.Timer(1, open_browser, args=(port,)).start()
    app.run(debug=True, port=port)
