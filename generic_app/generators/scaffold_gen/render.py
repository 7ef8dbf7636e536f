"""String templates for the dashboard page scaffolds (Next.js TSX).

Only the entity name and its accessor key vary; field-level rendering is
left to the EntityForm / EntityGrid components of the consuming UI.
"""
from generic_app.config.domain import EntityConfig
from generic_app.generators.utils import entity_to_model_key


def render_list_scaffold(entity: EntityConfig) -> str:
    """Generate the dashboard list page."""
    model_key = entity_to_model_key(entity)
    lines = [
        "",
        'import { Button } from "@/components/ui/button";',
        'import Link from "next/link";',
        'import prisma from "@/lib/prisma";',
        'import { EntityGrid } from "@/components/core/entity-grid";',
        'import { domainConfig } from "@/config/domain.config";',
        'import { deleteEntity } from "@/core/actions";',
        "",
        "export default async function DashboardPage() {",
        "  // @ts-ignore - Dynamic access to prisma model",
        f"  const entities = await prisma.{model_key}.findMany({{",
        "    orderBy: {",
        "      createdAt: 'desc'",
        "    }",
        "  });",
        "",
        "  return (",
        '    <div className="container mx-auto py-10">',
        '      <div className="flex justify-between items-center mb-8">',
        '        <h1 className="text-3xl font-bold">{domainConfig.app.name} Dashboard</h1>',
        "        <Link href={`/dashboard/add-${domainConfig.entity.name.toLowerCase()}`}>",
        "          <Button>Add New {domainConfig.entity.name}</Button>",
        "        </Link>",
        "      </div>",
        "",
        "      <EntityGrid",
        "        data={entities}",
        "        config={domainConfig.entity}",
        "        onDelete={deleteEntity}",
        "      />",
        "    </div>",
        "  );",
        "}",
        "",
    ]
    return "\n".join(lines)


def render_create_scaffold(entity: EntityConfig) -> str:
    """Generate the add page; the form itself is driven by the entity config."""
    lines = [
        "",
        "'use client';",
        "",
        "import { createEntity } from '@/core/actions';",
        "import { EntityForm } from '@/components/core';",
        "import { domainConfig } from '@/config/domain.config';",
        "",
        f"export default function Add{entity.name}Page() {{",
        "  return (",
        '    <div className="flex justify-center items-center min-h-screen">',
        "      <EntityForm",
        "        config={domainConfig.entity}",
        "        action={createEntity}",
        '        mode="create"',
        "      />",
        "    </div>",
        "  );",
        "}",
        "",
    ]
    return "\n".join(lines)


def render_edit_scaffold(entity: EntityConfig) -> str:
    """Generate the edit page, which loads the record through the accessor."""
    model_key = entity_to_model_key(entity)
    lines = [
        "",
        "import { notFound } from 'next/navigation';",
        "import prisma from '@/lib/prisma';",
        "import { updateEntity } from '@/core/actions';",
        "import { EntityForm } from '@/components/core';",
        "import { domainConfig } from '@/config/domain.config';",
        "",
        f"export default async function Edit{entity.name}Page({{ params }}: {{ params: Promise<{{ id: string }}> }}) {{",
        "    const { id } = await params;",
        "",
        "    // @ts-ignore - Dynamic access to prisma model",
        f"    const entity = await prisma.{model_key}.findUnique({{",
        "        where: { id },",
        "    });",
        "",
        "    if (!entity) {",
        "        notFound();",
        "    }",
        "",
        "    const updateAction = updateEntity.bind(null, id);",
        "",
        "    return (",
        '        <div className="flex justify-center items-center min-h-screen">',
        "            <EntityForm",
        "              config={domainConfig.entity}",
        "              action={updateAction}",
        "              initialData={entity}",
        '              mode="edit"',
        "            />",
        "        </div>",
        "    );",
        "}",
        "",
    ]
    return "\n".join(lines)
