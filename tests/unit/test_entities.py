"""Unit tests for the per-entity parsers."""

from prisma_sdl.parsers.entities import (
    parse_datasource,
    parse_enum,
    parse_field,
    parse_field_attributes,
    parse_generator,
    parse_model,
    parse_model_attribute,
)
from prisma_sdl.schemas.arguments import ModelAttributeArgument
from prisma_sdl.schemas.config import Datasource, Generator


class TestParseDatasource:
    """Test cases for parse_datasource."""

    def test_keys(self) -> None:
        body = '\n  provider = "mysql"\n  url      = env("MYSQL_URL")\n'

        datasource = parse_datasource(body, "main", Datasource())

        assert datasource.name == "main"
        assert datasource.provider == "mysql"
        assert datasource.url == 'env("MYSQL_URL")'

    def test_missing_keys_use_defaults(self) -> None:
        defaults = Datasource(provider="sqlite", url='"file:dev.db"')

        datasource = parse_datasource('\n  provider = "mysql"\n', "db", defaults)

        assert datasource.provider == "mysql"
        assert datasource.url == '"file:dev.db"'

    def test_first_occurrence_wins(self) -> None:
        body = '\n  provider = "mysql"\n  provider = "sqlite"\n'

        assert parse_datasource(body, "db", Datasource()).provider == "mysql"

    def test_unknown_keys_ignored(self) -> None:
        body = '\n  provider = "postgresql"\n  relationMode = "prisma"\n'

        datasource = parse_datasource(body, "db", Datasource())

        assert datasource.provider == "postgresql"


class TestParseGenerator:
    """Test cases for parse_generator."""

    def test_all_keys(self) -> None:
        body = (
            '\n  provider        = "prisma-client-js"\n'
            '  output          = "../generated"\n'
            '  previewFeatures = ["fullTextSearch", "metrics"]\n'
            '  binaryTargets   = ["native", "debian-openssl-3.0.x"]\n'
        )

        generator = parse_generator(body, "client", Generator())

        assert generator.provider == "prisma-client-js"
        assert generator.output == "../generated"
        assert generator.preview_features == ["fullTextSearch", "metrics"]
        assert generator.binary_targets == ["native", "debian-openssl-3.0.x"]

    def test_missing_lists_use_defaults(self) -> None:
        generator = parse_generator('\n  provider = "x"\n', "client", Generator())

        assert generator.preview_features == []
        assert generator.binary_targets == ["native"]
        assert generator.output is None

    def test_empty_list(self) -> None:
        body = '\n  provider = "x"\n  binaryTargets = []\n'

        assert parse_generator(body, "client", Generator()).binary_targets == []

    def test_defaults_are_copied(self) -> None:
        """Test that the parsed generator does not share lists with defaults."""
        defaults = Generator()
        generator = parse_generator("", "client", defaults)
        generator.binary_targets.append("linux-musl")

        assert defaults.binary_targets == ["native"]


class TestParseField:
    """Test cases for parse_field."""

    def test_optional_marker(self) -> None:
        field = parse_field("age Int?")

        assert field is not None
        assert field.type == "Int"
        assert field.is_list is False
        assert field.is_required is False

    def test_list_marker(self) -> None:
        field = parse_field("tags String[]")

        assert field is not None
        assert field.type == "String"
        assert field.is_list is True
        assert field.is_required is True

    def test_reference_type(self) -> None:
        field = parse_field(
            "author User @relation(fields: [authorId], references: [id])"
        )

        assert field is not None
        assert field.type == "User"
        assert field.is_scalar is False
        assert field.attributes[0].name == "relation"

    def test_attribute_attached_to_type(self) -> None:
        """Test that an attribute directly after the type keeps the field."""
        field = parse_field("id String@id")

        assert field is not None
        assert (field.name, field.type) == ("id", "String")
        assert [a.name for a in field.attributes] == ["id"]

    def test_attribute_attached_to_optional_marker(self) -> None:
        field = parse_field("bio String?@default(\"\")")

        assert field is not None
        assert field.is_required is False
        assert field.attributes[0].arguments[0].raw == '""'

    def test_not_a_field(self) -> None:
        assert parse_field("invalid") is None
        assert parse_field("= nothing") is None


class TestParseFieldAttributes:
    """Test cases for parse_field_attributes."""

    def test_bare_and_call_attributes(self) -> None:
        attributes = parse_field_attributes("@id @default(cuid())")

        assert [a.name for a in attributes] == ["id", "default"]
        assert attributes[0].arguments == []
        assert attributes[1].arguments[0].raw == "cuid()"
        assert attributes[1].arguments[0].is_expression is True

    def test_default_classification(self) -> None:
        literal = parse_field_attributes('@default("x")')[0].arguments[0]
        call = parse_field_attributes("@default(now())")[0].arguments[0]
        member = parse_field_attributes("@default(Status.ACTIVE)")[0].arguments[0]

        assert literal.is_expression is False
        assert call.is_expression is True
        assert member.is_expression is True
        assert member.raw == "Status.ACTIVE"

    def test_nested_call_argument(self) -> None:
        attributes = parse_field_attributes(
            '@default(dbgenerated("gen_random_uuid()"))'
        )

        assert attributes[0].arguments[0].raw == 'dbgenerated("gen_random_uuid()")'

    def test_namespaced_db_attribute(self) -> None:
        """Test that @db.Type(args) becomes a db attribute with one expression."""
        with_args = parse_field_attributes("@db.VarChar(255)")[0]
        bare = parse_field_attributes("@db.Text")[0]

        assert with_args.name == "db"
        assert [a.raw for a in with_args.arguments] == ["VarChar(255)"]
        assert with_args.arguments[0].is_expression is True
        assert bare.name == "db"
        assert [a.raw for a in bare.arguments] == ["Text"]

    def test_unclosed_call_takes_rest(self) -> None:
        attributes = parse_field_attributes("@default(now(")

        assert attributes[0].arguments[0].raw == "now("

    def test_stray_at_sign(self) -> None:
        attributes = parse_field_attributes("@ @unique")

        assert [a.name for a in attributes] == ["unique"]


class TestParseModelAttribute:
    """Test cases for parse_model_attribute."""

    def test_with_arguments(self) -> None:
        attribute = parse_model_attribute("@@index([email, name])")

        assert attribute is not None
        assert attribute.type == "index"
        assert isinstance(attribute.arguments[0], ModelAttributeArgument)
        assert attribute.arguments[0].raw == "[email, name]"

    def test_named_arguments(self) -> None:
        attribute = parse_model_attribute('@@unique(fields: [a, b], name: "ab")')

        assert attribute is not None
        assert [(a.name, a.raw) for a in attribute.arguments] == [
            ("fields", "[a, b]"),
            ("name", '"ab"'),
        ]

    def test_without_arguments(self) -> None:
        attribute = parse_model_attribute("@@ignore")

        assert attribute is not None
        assert attribute.type == "ignore"
        assert attribute.arguments == []

    def test_not_a_model_attribute(self) -> None:
        assert parse_model_attribute("@id") is None


class TestParseModel:
    """Test cases for parse_model."""

    def test_fields_and_attributes(self) -> None:
        body = (
            "\n"
            "  id    Int    @id @default(autoincrement())\n"
            "\n"
            "  email String @unique\n"
            "  ???\n"
            "\n"
            "  @@map(\"users\")\n"
        )

        model = parse_model(body, "User")

        assert model.name == "User"
        assert [f.name for f in model.fields] == ["id", "email"]
        assert [a.type for a in model.attributes] == ["map"]
        assert model.get_field("email") is not None
        assert model.get_field("missing") is None

    def test_empty_body(self) -> None:
        model = parse_model("", "Empty")

        assert model.fields == []
        assert model.attributes == []


class TestParseEnum:
    """Test cases for parse_enum."""

    def test_values_in_order(self) -> None:
        enum = parse_enum("\n  USER\n\n  ADMIN\n  GUEST\n", "Role")

        assert enum.name == "Role"
        assert enum.values == ["USER", "ADMIN", "GUEST"]
