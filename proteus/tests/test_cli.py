"""Tests for CLI interface."""

import json
import os
import tempfile

from click.testing import CliRunner

from proteus.cli import cli

FIXTURES_DIR = os.path.join(os.path.dirname(os.path.realpath(__file__)), "fixtures")
EXAMPLE = f"{FIXTURES_DIR}/example.proteus"
POINT = f"{FIXTURES_DIR}/point.proteus"


def describe_proto_command():
    def writes_one_proto_file_per_package(expect):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as output:
            result = runner.invoke(cli, ["proto", "-i", EXAMPLE, "-i", POINT, "-o", output])
            expect(result.exit_code) == 0

            example = os.path.join(output, "github.com/src-d/proteus/example/generated.proto")
            with open(example) as f:
                content = f.read()
            expect("package github.com.srcd.proteus.example;" in content) == True
            expect("message Product {" in content) == True
            expect("service ExampleService {" in content) == True

            point = os.path.join(output, "github.com/src-d/proteus/fixtures/subpkg/generated.proto")
            expect(os.path.exists(point)) == True

    def applies_custom_mappings(expect):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as output:
            result = runner.invoke(
                cli,
                ["proto", "-i", EXAMPLE, "-o", output, "-m", f"{FIXTURES_DIR}/mappings.json"],
            )
            expect(result.exit_code) == 0

            path = os.path.join(output, "github.com/src-d/proteus/example/generated.proto")
            with open(path) as f:
                content = f.read()
            expect('import "shop/categories.proto";' in content) == True
            expect("shop.categories.Options options = 9" in content) == True
            expect("sint64" in content) == True

    def fails_with_missing_input(expect):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as output:
            result = runner.invoke(cli, ["proto", "-i", f"{FIXTURES_DIR}/missing", "-o", output])
        expect(result.exit_code) == 1
        expect("Error:" in result.output) == True

    def fails_with_syntax_errors(expect):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as output:
            broken = os.path.join(output, "broken.proteus")
            with open(broken, "w") as f:
                f.write("package foo\nstruct {\n")
            result = runner.invoke(cli, ["proto", "-i", broken, "-o", output])
        expect(result.exit_code) == 1
        expect("Error:" in result.output) == True


def describe_rpc_command():
    def writes_server_implementation(expect):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as output:
            result = runner.invoke(cli, ["rpc", "-i", POINT, "-o", output])
            expect(result.exit_code) == 0

            path = os.path.join(output, "github.com/src-d/proteus/fixtures/subpkg/server.proteus.go")
            with open(path) as f:
                content = f.read()
            expect("package subpkg\n" in content) == True
            expect("type subpkgServiceServer struct {\n\tPoint *Point\n}" in content) == True
            expect("result = s.Point.GeneratedMethod(in.Arg1)" in content) == True

    def overrides_go_package(expect):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as output:
            result = runner.invoke(cli, ["rpc", "-i", POINT, "-o", output, "--go-package", "other"])
            expect(result.exit_code) == 0

            path = os.path.join(output, "github.com/src-d/proteus/fixtures/subpkg/server.proteus.go")
            with open(path) as f:
                expect("package other\n" in f.read()) == True


def describe_info_command():
    def outputs_json(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "-i", POINT, "--json"])
        expect(result.exit_code) == 0

        data = json.loads(result.stdout)
        expect(data["name"]) == "github.com.srcd.proteus.fixtures.subpkg"
        expect([m["name"] for m in data["messages"]]) == [
            "Point",
            "Point_GeneratedMethodRequest",
        ]
        expect(data["rpcs"][0]["recv"]) == "Point"

    def outputs_tables(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "-i", POINT])
        expect(result.exit_code) == 0
        expect("Package" in result.output) == True
        expect("Point_GeneratedMethod" in result.output) == True
