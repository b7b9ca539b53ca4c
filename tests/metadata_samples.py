"""Sample solution, project and AssemblyInfo texts shared by the tests."""

CS_ASSEMBLY_INFO = """using System.Reflection;
using System.Runtime.InteropServices;

// [assembly: AssemblyVersion("9.9.9.9")]
[assembly: AssemblyTitle("Core")]
[assembly: AssemblyCompany("")]
[assembly: AssemblyProduct("Widget")]
[assembly: AssemblyCopyright("Copyright (c) 2010")]
[assembly: AssemblyVersion("1.0.0.0")]
[assembly: AssemblyFileVersion("1.2.3.4")]
"""

VB_ASSEMBLY_INFO = """Imports System.Reflection

' <Assembly: AssemblyFileVersion("9.9.9.9")>
<Assembly: AssemblyCompany("Old Co")>
<Assembly: AssemblyVersion("1.0.0.0")>
<Assembly: AssemblyFileVersion("1.0.0.0")>
"""

CSPROJ = """<?xml version="1.0" encoding="utf-8"?>
<Project ToolsVersion="4.0" xmlns="http://schemas.microsoft.com/developer/msbuild/2003">
  <ItemGroup>
    <Compile Include="Program.cs" />
    <Compile Include="Properties\\AssemblyInfo.cs" />
  </ItemGroup>
</Project>
"""

VBPROJ = """<?xml version="1.0" encoding="utf-8"?>
<Project ToolsVersion="4.0" xmlns="http://schemas.microsoft.com/developer/msbuild/2003">
  <ItemGroup>
    <Compile Include="Module1.vb" />
    <Compile Include="My Project\\AssemblyInfo.vb" />
  </ItemGroup>
</Project>
"""

SOLUTION = """
Microsoft Visual Studio Solution File, Format Version 11.00
# Visual Studio 2010
Project("{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}") = "Core", "Core\\Core.csproj", "{0F3D1C55-0000-4E4B-9E57-000000000001}"
EndProject
Project("{F184B08F-C81C-45F6-A57F-5ABD9991F28F}") = "Ui", "Ui\\Ui.vbproj", "{0F3D1C55-0000-4E4B-9E57-000000000002}"
EndProject
Global
\tGlobalSection(SourceCodeControl) = preSolution
\t\tSccProjectUniqueName0 = "Core\\\\Core.csproj"
\tEndGlobalSection
EndGlobal
"""


