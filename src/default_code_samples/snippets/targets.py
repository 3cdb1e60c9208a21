"""Template renderers for every supported snippet language.

Each renderer turns an ``HttpRequest`` into idiomatic client code for one
language using only that language's standard or most common HTTP client.
"""

import json
import pprint
from typing import Callable, NamedTuple
from urllib.parse import urlsplit

from .har import HttpRequest


class Target(NamedTuple):
    name: str
    highlight_mode: str
    render: Callable[[HttpRequest], str]


# -- string literal helpers ---------------------------------------------------

def _dq(text: str) -> str:
    """Double-quoted literal valid in C-family languages."""
    return json.dumps(text, ensure_ascii=False)


def _sq(text: str) -> str:
    """Single-quoted literal with backslash escaping (PHP, Ruby); may span lines."""
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


_SWIFT_ESCAPES = {"\\": "\\\\", "\"": "\\\"", "\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"}
_KOTLIN_ESCAPES = {
    "\\": "\\\\", "\"": "\\\"", "\n": "\\n", "\r": "\\r", "\t": "\\t", "\b": "\\b", "$": "\\$",
}


def _escaped(text: str, escapes: dict[str, str], control: Callable[[int], str]) -> str:
    """Double-quoted literal using a language's own escape table."""
    out = []
    for ch in text:
        if ch in escapes:
            out.append(escapes[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(control(ord(ch)))
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def _swift(text: str) -> str:
    return _escaped(text, _SWIFT_ESCAPES, lambda c: f"\\u{{{c:x}}}")


def _kt(text: str) -> str:
    return _escaped(text, _KOTLIN_ESCAPES, lambda c: f"\\u{c:04x}")


def _sh(text: str) -> str:
    return "'" + text.replace("'", "'\\''") + "'"


def _ps(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


def _indent_tail(text: str, prefix: str) -> str:
    """Indent every line but the first, for values embedded mid-line."""
    return text.replace("\n", "\n" + prefix)


def _content_headers(req: HttpRequest) -> tuple[list[tuple[str, str]], str | None]:
    """Split out Content-Type for clients that set it on the body."""
    headers = []
    content_type = None
    for name, value in req.all_headers():
        if name.lower() == "content-type":
            content_type = value
        else:
            headers.append((name, value))
    return headers, content_type


# -- renderers ----------------------------------------------------------------

def render_shell(req: HttpRequest) -> str:
    lines = [f"curl --request {req.method}", f"--url {_sh(req.full_url)}"]
    for name, value in req.all_headers():
        lines.append(f"--header {_sh(f'{name}: {value}')}")
    if req.body_text is not None:
        lines.append(f"--data {_sh(req.body_text)}")
    return " \\\n  ".join(lines)


def render_http(req: HttpRequest) -> str:
    parts = urlsplit(req.full_url)
    target = parts.path or "/"
    if parts.query:
        target += "?" + parts.query
    lines = [f"{req.method} {target} HTTP/1.1", f"Host: {parts.netloc}"]
    lines.extend(f"{name}: {value}" for name, value in req.all_headers())
    if req.body_text is not None:
        lines.extend(["", req.body_text])
    return "\n".join(lines)


def _js_options(req: HttpRequest) -> list[str]:
    lines = ["const options = {", f"  method: {_dq(req.method)},"]
    headers = req.all_headers()
    if headers:
        lines.append("  headers: {")
        lines.extend(f"    {_dq(name)}: {_dq(value)}," for name, value in headers)
        lines.append("  },")
    if req.has_json_body:
        body = json.dumps(req.body_json, indent=2, ensure_ascii=False)
        lines.append(f"  body: JSON.stringify({_indent_tail(body, '  ')}),")
    elif req.body_text is not None:
        lines.append(f"  body: {_dq(req.body_text)},")
    lines.append("};")
    return lines


def render_javascript(req: HttpRequest) -> str:
    lines = [f"const url = {_dq(req.full_url)};"]
    lines.extend(_js_options(req))
    lines.extend([
        "",
        "fetch(url, options)",
        "  .then(res => res.json())",
        "  .then(json => console.log(json))",
        "  .catch(err => console.error(err));",
    ])
    return "\n".join(lines)


def render_node(req: HttpRequest) -> str:
    lines = [f"const url = {_dq(req.full_url)};"]
    lines.extend(_js_options(req))
    lines.extend([
        "",
        "try {",
        "  const response = await fetch(url, options);",
        "  const data = await response.json();",
        "  console.log(data);",
        "} catch (error) {",
        "  console.error(error);",
        "}",
    ])
    return "\n".join(lines)


def render_python(req: HttpRequest) -> str:
    lines = ["import requests", "", f"url = {_dq(req.full_url)}", ""]
    args = ["url"]
    if req.has_json_body:
        lines.append(f"payload = {pprint.pformat(req.body_json, sort_dicts=False)}")
        args.append("json=payload")
    elif req.body_text is not None:
        lines.append(f"payload = {req.body_text!r}")
        args.append("data=payload")
    headers = req.all_headers()
    if headers:
        lines.append("headers = {")
        lines.extend(f"    {_dq(name)}: {_dq(value)}," for name, value in headers)
        lines.append("}")
        args.append("headers=headers")
    if len(args) > 1:
        lines.append("")
    lines.extend([
        f"response = requests.request({_dq(req.method)}, {', '.join(args)})",
        "",
        "print(response.text)",
    ])
    return "\n".join(lines)


def render_go(req: HttpRequest) -> str:
    imports = ['"fmt"', '"io"', '"net/http"']
    body_arg = "nil"
    body_lines = []
    if req.body_text is not None:
        imports.append('"strings"')
        literal = f"`{req.body_text}`" if "`" not in req.body_text else _dq(req.body_text)
        body_lines = [f"\tpayload := strings.NewReader({literal})", ""]
        body_arg = "payload"

    lines = ["package main", "", "import ("]
    lines.extend(f"\t{imp}" for imp in imports)
    lines.extend([")", "", "func main() {", "", f"\turl := {_dq(req.full_url)}", ""])
    lines.extend(body_lines)
    lines.extend([f"\treq, _ := http.NewRequest({_dq(req.method)}, url, {body_arg})", ""])
    for name, value in req.all_headers():
        lines.append(f"\treq.Header.Add({_dq(name)}, {_dq(value)})")
    lines.extend([
        "",
        "\tres, _ := http.DefaultClient.Do(req)",
        "",
        "\tdefer res.Body.Close()",
        "\tbody, _ := io.ReadAll(res.Body)",
        "",
        "\tfmt.Println(string(body))",
        "",
        "}",
    ])
    return "\n".join(lines)


def render_ruby(req: HttpRequest) -> str:
    lines = ["require 'uri'", "require 'net/http'", "", f"url = URI({_sq(req.full_url)})", ""]
    lines.append("http = Net::HTTP.new(url.host, url.port)")
    if req.full_url.startswith("https://"):
        lines.append("http.use_ssl = true")
    lines.extend(["", f"request = Net::HTTP::{req.method.capitalize()}.new(url)"])
    for name, value in req.all_headers():
        lines.append(f"request[{_sq(name)}] = {_sq(value)}")
    if req.body_text is not None:
        lines.append(f"request.body = {_sq(req.body_text)}")
    lines.extend(["", "response = http.request(request)", "puts response.read_body"])
    return "\n".join(lines)


def render_php(req: HttpRequest) -> str:
    lines = [
        "<?php",
        "",
        "$curl = curl_init();",
        "",
        "curl_setopt_array($curl, [",
        f"  CURLOPT_URL => {_sq(req.full_url)},",
        "  CURLOPT_RETURNTRANSFER => true,",
        f"  CURLOPT_CUSTOMREQUEST => {_sq(req.method)},",
    ]
    if req.body_text is not None:
        lines.append(f"  CURLOPT_POSTFIELDS => {_sq(req.body_text)},")
    headers = req.all_headers()
    if headers:
        lines.append("  CURLOPT_HTTPHEADER => [")
        lines.extend(f"    {_sq(f'{name}: {value}')}," for name, value in headers)
        lines.append("  ],")
    lines.extend([
        "]);",
        "",
        "$response = curl_exec($curl);",
        "$err = curl_error($curl);",
        "",
        "curl_close($curl);",
        "",
        "if ($err) {",
        '  echo "cURL Error #:" . $err;',
        "} else {",
        "  echo $response;",
        "}",
    ])
    return "\n".join(lines)


def render_java(req: HttpRequest) -> str:
    if req.body_text is not None:
        publisher = f"HttpRequest.BodyPublishers.ofString({_dq(req.body_text)})"
    else:
        publisher = "HttpRequest.BodyPublishers.noBody()"
    lines = [
        "HttpRequest request = HttpRequest.newBuilder()",
        f"    .uri(URI.create({_dq(req.full_url)}))",
    ]
    for name, value in req.all_headers():
        lines.append(f"    .header({_dq(name)}, {_dq(value)})")
    lines.extend([
        f"    .method({_dq(req.method)}, {publisher})",
        "    .build();",
        "HttpResponse<String> response = HttpClient.newHttpClient()"
        ".send(request, HttpResponse.BodyHandlers.ofString());",
        "System.out.println(response.body());",
    ])
    return "\n".join(lines)


def render_csharp(req: HttpRequest) -> str:
    headers, content_type = _content_headers(req)
    lines = [
        "using System.Net.Http.Headers;",
        "var client = new HttpClient();",
        "var request = new HttpRequestMessage",
        "{",
        f"    Method = new HttpMethod({_dq(req.method)}),",
        f"    RequestUri = new Uri({_dq(req.full_url)}),",
    ]
    if headers:
        lines.extend(["    Headers =", "    {"])
        lines.extend(f"        {{ {_dq(name)}, {_dq(value)} }}," for name, value in headers)
        lines.append("    },")
    if req.body_text is not None:
        lines.append(f"    Content = new StringContent({_dq(req.body_text)})")
        lines.append("    {")
        lines.append("        Headers =")
        lines.append("        {")
        lines.append(
            f"            ContentType = new MediaTypeHeaderValue({_dq(content_type or 'text/plain')})"
        )
        lines.append("        }")
        lines.append("    }")
    lines.extend([
        "};",
        "using (var response = await client.SendAsync(request))",
        "{",
        "    response.EnsureSuccessStatusCode();",
        "    var body = await response.Content.ReadAsStringAsync();",
        "    Console.WriteLine(body);",
        "}",
    ])
    return "\n".join(lines)


def render_swift(req: HttpRequest) -> str:
    lines = [
        "import Foundation",
        "",
        f"let url = URL(string: {_swift(req.full_url)})!",
        "var request = URLRequest(url: url)",
        f"request.httpMethod = {_swift(req.method)}",
        "request.timeoutInterval = 10",
    ]
    headers = req.all_headers()
    if headers:
        lines.append("request.allHTTPHeaderFields = [")
        lines.extend(f"  {_swift(name)}: {_swift(value)}," for name, value in headers)
        lines.append("]")
    if req.body_text is not None:
        lines.append(f"request.httpBody = {_swift(req.body_text)}.data(using: .utf8)")
    lines.extend([
        "",
        "let (data, _) = try await URLSession.shared.data(for: request)",
        "print(String(decoding: data, as: UTF8.self))",
    ])
    return "\n".join(lines)


def render_kotlin(req: HttpRequest) -> str:
    headers, content_type = _content_headers(req)
    lines = [
        "import okhttp3.MediaType.Companion.toMediaTypeOrNull",
        "import okhttp3.OkHttpClient",
        "import okhttp3.Request",
        "import okhttp3.RequestBody.Companion.toRequestBody",
        "",
        "val client = OkHttpClient()",
        "",
    ]
    if req.body_text is not None:
        lines.append(f"val mediaType = {_kt(content_type or 'text/plain')}.toMediaTypeOrNull()")
        lines.append(f"val body = {_kt(req.body_text)}.toRequestBody(mediaType)")
        body_arg = "body"
    elif req.method in ("POST", "PUT", "PATCH"):
        body_arg = '"".toRequestBody(null)'
    else:
        body_arg = "null"
    lines.extend(["val request = Request.Builder()", f"  .url({_kt(req.full_url)})"])
    lines.append(f"  .method({_kt(req.method)}, {body_arg})")
    for name, value in headers:
        lines.append(f"  .addHeader({_kt(name)}, {_kt(value)})")
    lines.extend(["  .build()", "", "val response = client.newCall(request).execute()"])
    return "\n".join(lines)


def render_powershell(req: HttpRequest) -> str:
    headers, content_type = _content_headers(req)
    lines = []
    args = [f"-Uri {_ps(req.full_url)}", f"-Method {req.method}"]
    if headers:
        lines.append("$headers = @{}")
        lines.extend(f"$headers.Add({_ps(name)}, {_ps(value)})" for name, value in headers)
        args.append("-Headers $headers")
    if req.body_text is not None:
        if content_type:
            args.append(f"-ContentType {_ps(content_type)}")
        args.append(f"-Body {_ps(req.body_text)}")
    lines.append(f"$response = Invoke-WebRequest {' '.join(args)}")
    return "\n".join(lines)


def render_c(req: HttpRequest) -> str:
    lines = [
        "CURL *hnd = curl_easy_init();",
        "",
        f"curl_easy_setopt(hnd, CURLOPT_CUSTOMREQUEST, {_dq(req.method)});",
        f"curl_easy_setopt(hnd, CURLOPT_URL, {_dq(req.full_url)});",
    ]
    headers = req.all_headers()
    if headers:
        lines.extend(["", "struct curl_slist *headers = NULL;"])
        for name, value in headers:
            lines.append(f"headers = curl_slist_append(headers, {_dq(f'{name}: {value}')});")
        lines.append("curl_easy_setopt(hnd, CURLOPT_HTTPHEADER, headers);")
    if req.body_text is not None:
        lines.extend(["", f"curl_easy_setopt(hnd, CURLOPT_POSTFIELDS, {_dq(req.body_text)});"])
    lines.extend(["", "CURLcode ret = curl_easy_perform(hnd);"])
    return "\n".join(lines)


TARGETS: dict[str, Target] = {
    t.name: t
    for t in (
        Target("c", "c", render_c),
        Target("csharp", "csharp", render_csharp),
        Target("go", "go", render_go),
        Target("http", "http", render_http),
        Target("java", "java", render_java),
        Target("javascript", "javascript", render_javascript),
        Target("kotlin", "kotlin", render_kotlin),
        Target("node", "javascript", render_node),
        Target("php", "php", render_php),
        Target("powershell", "powershell", render_powershell),
        Target("python", "python", render_python),
        Target("ruby", "ruby", render_ruby),
        Target("shell", "shell", render_shell),
        Target("swift", "swift", render_swift),
    )
}


def get_supported_languages() -> list[str]:
    return list(TARGETS)
