from __future__ import annotations

import dataclasses

import pytest

from ghproxy_lists.config import AppConfig, load_config_from_env

ENV_KEYS = (
    "GHPROXY_INPUT_FILE",
    "GHPROXY_OUTPUT_DIR",
    "GHPROXY_CATEGORIES",
    "GHPROXY_CATEGORIES_FILE",
    "GHPROXY_SOURCE_URL",
    "GHPROXY_REFRESH",
    "GHPROXY_FETCH_TIMEOUT",
    "GHPROXY_FETCH_VERIFY_SSL",
    "GHPROXY_FETCH_UA",
    "GHPROXY_STRICT",
    "GHPROXY_SUMMARY",
    "GHPROXY_LOG_LEVEL",
)

USERSCRIPT = """\
// ==UserScript==
// @name         GitHub 增强 - 高速下载
// @match        *://github.com/*
// ==/UserScript==

(function() {
    'use strict';
    var backColor = '#ffffff', fontColor = '#888888';
    const download_url_us = [
        ['https://gh.h233.eu.org/https://github.com', '美国', '[美国 Cloudflare CDN] - 该公益加速源由 [@X.I.U/XIU2] 提供'],
        //['https://gh.old.example/https://github.com', '美国', '已失效'],
        ['https://gh.ddlc.top/https://github.com', '美国', '[美国 Cloudflare CDN]&#10;&#10;- 缓存：无'], // trailing note

        /* ['https://block.example/https://github.com', '美国', 'block'], */
        ['https://gh.h233.eu.org/https://github.com', '美国', 'duplicate'],
    ], download_url = [
        ['https://ghproxy.example/https://github.com', '韩国', '[韩国 首尔]'],
        ['https://broken.example/https://github.com', '日本'],
    ], clone_url = [
        ['https://gitclone.com', '国内', '[中国 国内] - 该公益加速源由 [GitClone] 提供&#10;&#10;- 缓存：有'],
        ['https://kkgithub.com', '香港',
            '[中国 香港] - 多行条目'],
    ], clone_ssh_url = [
        ['ssh://git@ssh.github.com:443/', '美国', '[美国 GitHub 官方]'],
    ], raw_url = [
        ['https://raw.githubusercontent.com', 'Github 原生', '[日本 东京]'],
        ['https://raw.kkgithub.com', '香港', '[中国 香港]'],
    ], svg = [
        '<svg class="octicon" viewBox="0 0 16 16"></svg>'
    ];
})();
"""

EXPECTED_COUNTS = {
    "download_url_us": 2,
    "clone_url": 2,
    "clone_ssh_url": 1,
    "raw_url": 2,
    "download_url": 1,
}


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so the keys main() writes are removed again on teardown
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture
def script_file(tmp_path):
    path = tmp_path / "temp" / "ghproxy.user.js"
    path.parent.mkdir()
    path.write_text(USERSCRIPT, encoding="utf-8")
    return path


@pytest.fixture
def make_config(clean_env, tmp_path, script_file):
    def _make(**overrides) -> AppConfig:
        base = dataclasses.replace(
            load_config_from_env(),
            input_file=str(script_file),
            output_dir=str(tmp_path / "dist"),
        )
        return dataclasses.replace(base, **overrides)

    return _make
